"""Websocket endpoint and presence queries for live collaboration."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from tasket.domain.entities import UserSummary
from tasket.domain.errors import AuthenticationError
from tasket.infrastructure.realtime import RealtimeHub, WebSocketConnection
from tasket.interfaces.api.dependencies import get_current_user, get_realtime_hub
from tasket.interfaces.api.schemas import OnlineUserRead, RealtimeStatsRead

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Bidirectional event stream.

    Frames are ``{"type": ..., "data": ...}`` JSON objects. The client sends
    ``authenticate`` first; a ``token`` query parameter does the same on
    connect.
    """

    hub: RealtimeHub = websocket.app.state.realtime_hub
    gateway = hub.gateway

    await websocket.accept()
    connection = WebSocketConnection(websocket)
    gateway.connect(connection)
    try:
        token = websocket.query_params.get("token")
        if token:
            await gateway.authenticate(connection, token)

        while True:
            try:
                frame = await websocket.receive_json()
            except (ValueError, KeyError):
                logger.debug("Ignoring malformed frame from %s", connection.id)
                continue
            await gateway.dispatch(connection, frame)
    except AuthenticationError:
        pass
    except WebSocketDisconnect:
        pass
    finally:
        await gateway.disconnect(connection.id)


@router.get("/realtime/departments/{department_id}/online", response_model=list[OnlineUserRead])
async def list_online_department_users(
    department_id: int,
    hub: RealtimeHub = Depends(get_realtime_hub),
    _current_user: UserSummary = Depends(get_current_user),
) -> list[OnlineUserRead]:
    return [
        OnlineUserRead(**user) for user in hub.online_users_in_department(department_id)
    ]


@router.get("/realtime/stats", response_model=RealtimeStatsRead)
async def realtime_stats(
    hub: RealtimeHub = Depends(get_realtime_hub),
    _current_user: UserSummary = Depends(get_current_user),
) -> RealtimeStatsRead:
    return RealtimeStatsRead(
        connected_users=hub.connected_users_count(),
        open_connections=len(hub.registry),
    )
