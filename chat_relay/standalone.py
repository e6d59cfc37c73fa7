"""Standalone chat relay server.

Usage::

    cd samples/chat
    poetry run python app.py

    # Or via script entry point from anywhere:
    poetry run chat-relay

    # Custom port / in-memory store:
    PORT=9000 poetry run chat-relay
    CHAT_STORE=memory poetry run chat-relay

See :mod:`chat_relay.config` for all environment variables.
Loads .env from the current working directory or any parent directory.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from chat_relay.config import RelayConfig, StoreBackend
from chat_relay.server import build_http_router
from chat_relay.store import MessageStore, MemoryMessageStore

logger = logging.getLogger(__name__)


def build_store(config: RelayConfig) -> MessageStore:
    """Construct the message store selected by ``config.store_backend``."""
    timeouts = {
        "connect_timeout": config.connect_timeout,
        "operation_timeout": config.operation_timeout,
    }
    if config.store_backend == StoreBackend.MEMORY:
        return MemoryMessageStore(**timeouts)

    from chat_relay.store.mongodb_message_store import MongoDBMessageStore
    return MongoDBMessageStore(
        mongo_uri=config.mongo_uri,
        mongo_db=config.mongo_db,
        mongo_collection=config.mongo_collection,
        **timeouts,
    )


def create_app(config: Optional[RelayConfig] = None, store: Optional[MessageStore] = None) -> FastAPI:
    """Create the FastAPI application.

    The store is connected in the lifespan, before the server accepts any
    connection; if it is unreachable, startup fails with
    :class:`~chat_relay.store.StoreConnectionError`. Also called by uvicorn
    via the factory=True flag.
    """
    if config is None:
        config = RelayConfig.from_env()
    if store is None:
        store = build_store(config)

    @asynccontextmanager
    async def lifespan(_a: FastAPI):
        await store.connect()
        logger.info(f"[STARTUP] Message store ready ({type(store).__name__})")
        try:
            yield
        finally:
            await store.close()
            logger.info("[SHUTDOWN] Message store released")

    _app = FastAPI(title="Chat Relay", docs_url=None, redoc_url=None, lifespan=lifespan)
    _app.state.config = config
    _app.state.message_store = store
    _app.include_router(build_http_router())
    return _app


def main():
    """Load .env, configure logging, and start the server."""
    from dotenv import load_dotenv, find_dotenv
    load_dotenv(find_dotenv(usecwd=True))

    import uvicorn

    config = RelayConfig.from_env()

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )

    print(f"\n  chat relay → http://localhost:{config.port}\n")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
