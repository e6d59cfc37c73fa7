"""Test configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient

from chat_relay.config import RelayConfig, StoreBackend
from chat_relay.standalone import create_app
from chat_relay.store import MemoryMessageStore, StoreConnectionError, StoreResult


class FailingAppendStore(MemoryMessageStore):
    """Memory store whose writes always fail."""
    async def append(self, text: str):
        return StoreResult.failure(RuntimeError("write refused"))


class FailingHistoryStore(MemoryMessageStore):
    """Memory store whose history reads always fail."""
    async def fetch_history(self):
        return StoreResult.failure(RuntimeError("read refused"))


class UnreachableStore(MemoryMessageStore):
    """Memory store that cannot be connected."""
    async def connect(self) -> None:
        raise StoreConnectionError("store unreachable", uri="memory://nowhere")


@pytest.fixture
def config():
    return RelayConfig(store_backend=StoreBackend.MEMORY)


@pytest.fixture
def store():
    return MemoryMessageStore()


@pytest.fixture
def client(config, store):
    """Test client with a running lifespan around an in-memory store."""
    with TestClient(create_app(config, store)) as c:
        yield c


class StubCursor:
    """Stand-in for a motor cursor: ``sort`` chains, ``to_list`` runs ``fetch``."""
    def __init__(self, fetch):
        self._fetch = fetch

    def sort(self, *args, **kwargs):
        return self

    async def to_list(self, length=None):
        return await self._fetch()


class StubCollection:
    """Stand-in for a motor collection whose reads and writes are scripted coroutines."""
    def __init__(self, fetch=None, insert=None):
        self._fetch = fetch
        self._insert = insert
        self.inserted = []

    def find(self, *args, **kwargs):
        return StubCursor(self._fetch)

    async def insert_one(self, doc):
        if self._insert is not None:
            await self._insert()
        self.inserted.append(doc)
