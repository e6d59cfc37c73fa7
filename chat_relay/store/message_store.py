from abc import ABC, abstractmethod

from chat_relay.chat_models import ChatMessage
from .store_types import StoreResult

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_OPERATION_TIMEOUT = 5.0


class MessageStore(ABC):
    """Base class for chat message stores."""
    def __init__(self, *, connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
                 operation_timeout: float = DEFAULT_OPERATION_TIMEOUT):
        if connect_timeout <= 0 or operation_timeout <= 0:
            raise ValueError("Store timeouts must be positive")
        self.connect_timeout = connect_timeout
        self.operation_timeout = operation_timeout

    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection.

        :raises StoreConnectionError: if the store is unreachable within ``connect_timeout``
        """
        raise NotImplementedError("Subclasses must implement connect")

    @abstractmethod
    async def fetch_history(self) -> StoreResult[list[ChatMessage]]:
        """Return all stored messages ordered by timestamp ascending."""
        raise NotImplementedError("Subclasses must implement fetch_history")

    @abstractmethod
    async def append(self, text: str) -> StoreResult[ChatMessage]:
        """Store a message stamped with the current time."""
        raise NotImplementedError("Subclasses must implement append")

    @abstractmethod
    async def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        raise NotImplementedError("Subclasses must implement close")
