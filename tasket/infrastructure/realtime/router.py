"""Deliver realtime events to the members of a room."""

from __future__ import annotations

import logging
from typing import Literal

from tasket.domain.entities import RealtimeEvent

from .connection import Connection
from .registry import ConnectionRegistry, user_room

logger = logging.getLogger(__name__)

BROADCAST_ALL: Literal["all"] = "all"


class BroadcastRouter:
    """Fan an event out to every connection currently in a room."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    async def emit(
        self, room: str, event: RealtimeEvent, *, exclude: str | None = None
    ) -> int:
        """Deliver ``event`` to ``room`` and return how many connections got it.

        An empty room is not an error.
        """

        recipients = [
            connection
            for connection in self._registry.members(room)
            if connection.id != exclude
        ]
        if not recipients:
            logger.debug("No members in room %s for %s", room, event.event)
            return 0
        return await self._deliver(recipients, event)

    async def emit_to_all(self, event: RealtimeEvent) -> int:
        """Deliver to every authenticated connection, whatever its rooms."""

        recipients = [
            connection
            for connection in self._registry.connections()
            if self._registry.is_authenticated(connection.id)
        ]
        return await self._deliver(recipients, event)

    async def emit_to_user(self, user_id: int | Literal["all"], event: RealtimeEvent) -> int:
        if user_id == BROADCAST_ALL:
            return await self.emit_to_all(event)
        return await self.emit(user_room(user_id), event)

    async def send_direct(self, user_id: int, event: RealtimeEvent) -> bool:
        """Send to the most recently authenticated connection of ``user_id``."""

        connection = self._registry.connection_for_user(user_id)
        if connection is None:
            return False
        return await self.send(connection, event)

    async def send(self, connection: Connection, event: RealtimeEvent) -> bool:
        return await self._deliver([connection], event) == 1

    async def _deliver(self, connections: list[Connection], event: RealtimeEvent) -> int:
        payload = event.to_payload()
        delivered = 0
        for connection in connections:
            try:
                await connection.send(event.event, payload)
            except Exception:
                logger.warning(
                    "Failed to deliver %s to connection %s",
                    event.event,
                    connection.id,
                    exc_info=True,
                )
                continue
            delivered += 1
        return delivered


__all__ = ["BroadcastRouter", "BROADCAST_ALL"]
