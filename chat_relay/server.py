"""HTTP front door: landing page and the WebSocket upgrade route.

Host apps include the router returned by :func:`build_http_router` and put a
connected :class:`~chat_relay.store.MessageStore` on ``app.state.message_store``.
"""

import os
import logging

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.websockets import WebSocket

from chat_relay.session import RelaySession
from chat_relay.store import MessageStore

logger = logging.getLogger(__name__)

# Route constants
ROUTE_INDEX = "/"
ROUTE_WS = "/ws"
ROUTE_HEALTH = "/health"
INDEX_FILE = "chat.html"


def get_static_path() -> str:
    """Return absolute path to the static assets directory."""
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), 'static')


def get_message_store(scope) -> MessageStore:
    """Return the store attached to the running app."""
    store = getattr(scope.app.state, "message_store", None)
    if store is None:
        raise RuntimeError("No message store attached to app.state")
    return store


def build_http_router() -> APIRouter:
    """Build the APIRouter with the landing page, health check and WS endpoint."""
    router = APIRouter()
    index_path = os.path.join(get_static_path(), INDEX_FILE)

    @router.get(ROUTE_INDEX)
    async def index():
        return FileResponse(index_path, media_type="text/html")

    @router.get(ROUTE_HEALTH)
    async def health():
        return {"status": "ok"}

    @router.get(ROUTE_WS)
    async def websocket_without_upgrade(request: Request):
        """Plain HTTP request to the channel route: the handshake cannot happen."""
        logger.warning(f"[WS] Upgrade missing in request from "
                       f"{request.client.host if request.client else 'unknown'}")
        return PlainTextResponse("Could not open websocket connection", status_code=400)

    @router.websocket(ROUTE_WS)
    async def websocket_chat(ws: WebSocket):
        """Replay history, then echo every frame back to this client."""
        session = RelaySession(ws, get_message_store(ws))
        await session.run()

    return router
