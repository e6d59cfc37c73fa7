"""chat-relay — WebSocket chat relay with persisted history."""

from chat_relay.chat_models import ChatMessage
from chat_relay.config import RelayConfig, StoreBackend
from chat_relay.session import RelaySession, SessionState
from chat_relay.store import (
    MessageStore, MemoryMessageStore, StoreResult, StoreError, StoreConnectionError,
)

__all__ = [
    "ChatMessage",
    "RelayConfig",
    "StoreBackend",
    "RelaySession",
    "SessionState",
    "MessageStore",
    "MemoryMessageStore",
    "MongoDBMessageStore",
    "StoreResult",
    "StoreError",
    "StoreConnectionError",
    "create_app",
]


def __getattr__(name: str):
    if name == "MongoDBMessageStore":
        from chat_relay.store.mongodb_message_store import MongoDBMessageStore
        return MongoDBMessageStore
    if name == "create_app":
        from chat_relay.standalone import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
