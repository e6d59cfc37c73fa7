"""Tests for the in-memory message store."""
import pytest

from chat_relay.store import MemoryMessageStore


@pytest.mark.asyncio
async def test_append_then_history_in_order():
    store = MemoryMessageStore()
    await store.connect()

    result = await store.fetch_history()
    assert result.ok
    assert result.value == []

    for text in ("first", "second", "third"):
        saved = await store.append(text)
        assert saved.ok
        assert saved.value.text == text

    history = await store.fetch_history()
    assert history.ok
    assert [m.text for m in history.value] == ["first", "second", "third"]
    timestamps = [m.timestamp for m in history.value]
    assert timestamps == sorted(timestamps)
    assert len(store) == 3


@pytest.mark.asyncio
async def test_empty_and_unicode_text_is_stored_verbatim():
    store = MemoryMessageStore()
    await store.append("")
    await store.append("こんにちは 👋")

    history = await store.fetch_history()
    assert [m.text for m in history.value] == ["", "こんにちは 👋"]


@pytest.mark.asyncio
async def test_connect_and_close():
    store = MemoryMessageStore()
    assert not store.connected
    await store.connect()
    assert store.connected
    await store.close()
    await store.close()
    assert not store.connected


def test_timeouts_must_be_positive():
    with pytest.raises(ValueError):
        MemoryMessageStore(operation_timeout=0)
    with pytest.raises(ValueError):
        MemoryMessageStore(connect_timeout=-1)
