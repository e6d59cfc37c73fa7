"""End-to-end tests for the HTTP front door and WebSocket relay."""
import pytest
from fastapi.testclient import TestClient

from chat_relay.standalone import create_app
from chat_relay.store import StoreConnectionError
from .conftest import FailingAppendStore, FailingHistoryStore, UnreachableStore


def test_index_serves_html(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<title>Chat</title>" in response.text


def test_health(client):
    response = client.get("/health")
    assert response.json() == {"status": "ok"}


def test_plain_get_on_ws_route_is_rejected(client):
    response = client.get("/ws")
    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Could not open websocket connection"


def test_messages_echoed_in_order(client, store):
    with client.websocket_connect("/ws") as ws:
        for text in ("one", "two", "three"):
            ws.send_text(text)
        assert [ws.receive_text() for _ in range(3)] == ["one", "two", "three"]
    assert len(store) == 3


def test_binary_frames_echoed_as_binary(client, store):
    with client.websocket_connect("/ws") as ws:
        ws.send_bytes("grüße".encode("utf-8"))
        assert ws.receive_bytes() == "grüße".encode("utf-8")


def test_history_replayed_before_echo(client):
    with client.websocket_connect("/ws") as first:
        first.send_text("hello")
        assert first.receive_text() == "hello"

    with client.websocket_connect("/ws") as second:
        assert second.receive_text() == "hello"
        second.send_text("world")
        assert second.receive_text() == "world"

    with client.websocket_connect("/ws") as third:
        assert third.receive_text() == "hello"
        assert third.receive_text() == "world"


def test_no_broadcast_between_sessions(client):
    with client.websocket_connect("/ws") as a:
        a.send_text("hello")
        assert a.receive_text() == "hello"

        with client.websocket_connect("/ws") as b:
            assert b.receive_text() == "hello"
            b.send_text("world")
            assert b.receive_text() == "world"

        # A's next frame is its own echo, not B's message
        a.send_text("again")
        assert a.receive_text() == "again"


def test_echo_survives_persistence_failure(config):
    store = FailingAppendStore()
    with TestClient(create_app(config, store)) as client:
        with client.websocket_connect("/ws") as ws:
            ws.send_text("not saved")
            assert ws.receive_text() == "not saved"
    assert len(store) == 0


def test_session_proceeds_without_history(config):
    store = FailingHistoryStore()
    with TestClient(create_app(config, store)) as client:
        with client.websocket_connect("/ws") as ws:
            ws.send_text("first")
            assert ws.receive_text() == "first"
    assert len(store) == 1


def test_startup_aborts_when_store_unreachable(config):
    app = create_app(config, UnreachableStore())
    with pytest.raises(StoreConnectionError):
        with TestClient(app):
            pass


def test_store_closed_on_shutdown(config, store):
    with TestClient(create_app(config, store)):
        assert store.connected
    assert not store.connected
