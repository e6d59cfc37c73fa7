import logging
import threading

from chat_relay.chat_models import ChatMessage, utc_now
from .message_store import MessageStore
from .store_types import StoreResult

logger = logging.getLogger(__name__)


class MemoryMessageStore(MessageStore):
    """Message store with in-memory tracking."""
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._messages: list[ChatMessage] = []
        self._lock = threading.Lock()
        self._connected = False

    async def connect(self) -> None:
        self._connected = True
        logger.debug("[STORE] In-memory message store ready")

    async def fetch_history(self) -> StoreResult[list[ChatMessage]]:
        with self._lock:
            history = sorted(self._messages, key=lambda m: m.timestamp)
        logger.debug(f"[STORE] Fetched {len(history)} messages from memory")
        return StoreResult.success(history)

    async def append(self, text: str) -> StoreResult[ChatMessage]:
        message = ChatMessage(text=text, timestamp=utc_now())
        with self._lock:
            self._messages.append(message)
        return StoreResult.success(message)

    async def close(self) -> None:
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
