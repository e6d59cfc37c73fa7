from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StoreError(Exception):
    """Base class for message store errors."""


class StoreConnectionError(StoreError):
    """Raised when the store cannot be reached within the connect timeout."""
    def __init__(self, message: str, uri: Optional[str] = None):
        self.uri = uri
        super().__init__(message)


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Outcome of a store operation.

    Store operations never raise for driver errors; they hand back a result
    and the caller decides whether to surface, retry or ignore it.
    """
    ok: bool
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "StoreResult[T]":
        return cls(ok=False, error=error)
