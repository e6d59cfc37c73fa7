"""Per-connection relay session.

A session upgrades the connection, replays the stored history and then
echoes every inbound frame back to the same connection after persisting it.
Nothing is shared between sessions except the store.
"""

import logging
from enum import Enum
from typing import Optional

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from chat_relay.store import MessageStore

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of a relay session."""
    CONNECTING = "connecting"
    UPGRADED = "upgraded"
    STREAMING = "streaming"
    CLOSED = "closed"


class RelaySession:
    """Runs one WebSocket connection until it fails or the client leaves."""

    def __init__(self, websocket: WebSocket, store: MessageStore):
        self.websocket = websocket
        self.store = store
        self.state = SessionState.CONNECTING
        self.received = 0
        self.echoed = 0

    @property
    def client_label(self) -> str:
        client = self.websocket.client
        return f"{client.host}:{client.port}" if client else "unknown"

    async def run(self) -> None:
        """Drive the session through all states; returns once closed."""
        if not await self._upgrade():
            return
        try:
            await self._replay_history()
            await self._stream()
        finally:
            await self._release()
            self.state = SessionState.CLOSED
            logger.info(f"[WS] Session {self.client_label} closed "
                        f"(received={self.received}, echoed={self.echoed})")

    async def _upgrade(self) -> bool:
        try:
            await self.websocket.accept()
        except Exception as e:
            logger.error(f"[WS] Could not open websocket connection for {self.client_label}: "
                         f"{type(e).__name__}: {e}")
            self.state = SessionState.CLOSED
            return False
        self.state = SessionState.UPGRADED
        logger.info(f"[WS] Client {self.client_label} connected")
        return True

    async def _replay_history(self) -> None:
        """Send every stored message as its own text frame, oldest first."""
        result = await self.store.fetch_history()
        if not result.ok:
            logger.warning(f"[HISTORY] Proceeding without history: {result.error}")
            return
        sent = 0
        try:
            for message in result.value:
                await self.websocket.send_text(message.text)
                sent += 1
        except Exception as e:
            logger.warning(f"[HISTORY] Replay stopped after {sent} messages: {type(e).__name__}: {e}")
            return
        logger.debug(f"[HISTORY] Replayed {sent} messages to {self.client_label}")

    async def _stream(self) -> None:
        self.state = SessionState.STREAMING
        try:
            while True:
                text, data = await self._receive_frame()
                self.received += 1

                saved = await self.store.append(text)
                if not saved.ok:
                    logger.warning(f"[WS] Message from {self.client_label} not persisted: {saved.error}")

                if data is None:
                    await self.websocket.send_text(text)
                else:
                    await self.websocket.send_bytes(data)
                self.echoed += 1
        except WebSocketDisconnect as e:
            logger.info(f"[WS] Client {self.client_label} disconnected (code={e.code})")
        except Exception as e:
            logger.error(f"[WS] I/O error in session {self.client_label}: {type(e).__name__}: {e}")

    async def _release(self) -> None:
        ws = self.websocket
        if ws.client_state != WebSocketState.CONNECTED or ws.application_state != WebSocketState.CONNECTED:
            return
        try:
            await ws.close()
        except Exception as e:
            logger.debug(f"[WS] Close after error failed for {self.client_label}: {e}")

    async def _receive_frame(self) -> tuple[str, Optional[bytes]]:
        """Wait for the next data frame.

        Returns the payload as text plus the raw bytes for binary frames
        (``None`` for text frames) so the echo keeps the frame type.
        """
        message = await self.websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
        if message.get("text") is not None:
            return message["text"], None
        data = message.get("bytes") or b""
        return data.decode("utf-8", errors="replace"), data
