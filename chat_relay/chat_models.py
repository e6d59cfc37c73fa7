"""Models for chat relay messages."""
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """A single persisted chat message."""
    model_config = ConfigDict(frozen=True)

    text: str
    timestamp: datetime = Field(default_factory=utc_now)

    def to_document(self) -> dict:
        """Document layout used by the store: ``{message, timestamp}``."""
        return {"message": self.text, "timestamp": self.timestamp}

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ChatMessage":
        """Build a message from a stored document.

        :raises ValueError: if ``message`` is missing or not a string
        """
        text = doc.get("message")
        if not isinstance(text, str):
            raise ValueError(f"Document has no string 'message' field: {doc.get('_id')!r}")
        timestamp = doc.get("timestamp")
        if not isinstance(timestamp, datetime):
            raise ValueError(f"Document has no datetime 'timestamp' field: {doc.get('_id')!r}")
        return cls(text=text, timestamp=timestamp)
