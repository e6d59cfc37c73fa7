from .store_types import StoreError, StoreConnectionError, StoreResult
from .message_store import MessageStore, DEFAULT_CONNECT_TIMEOUT, DEFAULT_OPERATION_TIMEOUT
from .memory_message_store import MemoryMessageStore


def __getattr__(name):
    """Lazy imports for optional dependencies."""
    if name == "MongoDBMessageStore":
        from .mongodb_message_store import MongoDBMessageStore
        return MongoDBMessageStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'StoreError',
    'StoreConnectionError',
    'StoreResult',
    'MessageStore',
    'MemoryMessageStore',
    'MongoDBMessageStore',
    'DEFAULT_CONNECT_TIMEOUT',
    'DEFAULT_OPERATION_TIMEOUT',
]
