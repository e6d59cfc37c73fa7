"""Runtime configuration for the chat relay.

Values come from the process environment; ``main()`` loads a ``.env`` file
from the working directory (or any parent) before reading them.

Environment variables:
    MONGODB_CONNECTION  — MongoDB connection string (default: mongodb://localhost:27017)
    CHAT_DB             — Database name (default: chatdb)
    CHAT_COLLECTION     — Collection name (default: messages)
    CHAT_STORE          — ``mongodb`` or ``memory`` (default: mongodb)
    HOST                — Bind address (default: 0.0.0.0)
    PORT                — Listening port (default: 8080)
    CONNECT_TIMEOUT     — Seconds to wait for the store at startup (default: 10)
    OPERATION_TIMEOUT   — Seconds allowed per store read/write (default: 5)
    LOG_LEVEL           — Logging level name (default: INFO)
"""

import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field


class StoreBackend(str, Enum):
    """Available message store backends."""
    MONGODB = "mongodb"
    MEMORY = "memory"


class RelayConfig(BaseModel):
    """Process-wide settings, fixed at startup."""
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "chatdb"
    mongo_collection: str = "messages"
    store_backend: StoreBackend = StoreBackend.MONGODB
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    connect_timeout: float = Field(default=10.0, gt=0)
    operation_timeout: float = Field(default=5.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """Build the config from environment variables, falling back to defaults.

        :raises pydantic.ValidationError: if a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        mapping = {
            "mongo_uri": "MONGODB_CONNECTION",
            "mongo_db": "CHAT_DB",
            "mongo_collection": "CHAT_COLLECTION",
            "store_backend": "CHAT_STORE",
            "host": "HOST",
            "port": "PORT",
            "connect_timeout": "CONNECT_TIMEOUT",
            "operation_timeout": "OPERATION_TIMEOUT",
            "log_level": "LOG_LEVEL",
        }
        values = {field: env[var] for field, var in mapping.items() if env.get(var)}
        if "store_backend" in values:
            values["store_backend"] = values["store_backend"].lower()
        return cls(**values)
