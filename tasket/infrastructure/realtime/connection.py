"""Transport wrapper for live client connections."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from uuid import uuid4

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Anything the registry can address: one live client."""

    id: str

    async def send(self, event: str, payload: Any) -> None: ...

    async def close(self, code: int = 1000) -> None: ...


class WebSocketConnection:
    """Adapt a FastAPI websocket to the ``{"type", "data"}`` frame envelope."""

    def __init__(self, websocket: WebSocket, connection_id: str | None = None) -> None:
        self.id = connection_id or uuid4().hex
        self._websocket = websocket

    async def send(self, event: str, payload: Any) -> None:
        await self._websocket.send_json({"type": event, "data": payload})

    async def close(self, code: int = 1000) -> None:
        if self._websocket.application_state == WebSocketState.DISCONNECTED:
            return
        try:
            await self._websocket.close(code=code)
        except RuntimeError:
            logger.debug("Connection %s already closed", self.id)

    def __repr__(self) -> str:
        return f"WebSocketConnection(id={self.id!r})"


__all__ = ["Connection", "WebSocketConnection"]
