"""Composition root for the realtime subsystem."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from tasket.application.ports import IdentityResolver
from tasket.domain.entities import DirectMessage
from tasket.utils import now_in_app_timezone

from .fanout import EventFanout
from .gateway import RealtimeGateway
from .presence import PresenceTracker
from .publisher import RealtimePublisher
from .registry import ConnectionRegistry
from .router import BroadcastRouter

logger = logging.getLogger(__name__)


class RealtimeHub:
    """Own one registry and the components that share it.

    Built once at application start and torn down with :meth:`shutdown`.
    """

    def __init__(
        self,
        identity: IdentityResolver,
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self.registry = ConnectionRegistry()
        self.router = BroadcastRouter(self.registry)
        self.presence = PresenceTracker(self.registry, self.router, clock)
        self.fanout = EventFanout(self.router, clock)
        self.gateway = RealtimeGateway(
            self.registry, self.router, self.presence, self.fanout, identity
        )
        self.publisher = RealtimePublisher(self.fanout)

    def online_users_in_department(self, department_id: int) -> list[dict[str, object]]:
        return self.presence.online_users_in_department(department_id)

    def connected_users_count(self) -> int:
        return self.presence.connected_users_count()

    async def send_direct_message(self, user_id: int, message: Any) -> bool:
        return await self.router.send_direct(user_id, DirectMessage(message=message))

    async def shutdown(self) -> None:
        await self.publisher.drain()
        for connection in self.registry.connections():
            try:
                await connection.close(code=1001)
            except Exception:
                logger.debug("Ignoring close failure for %s", connection.id, exc_info=True)
        self.registry.clear()
        logger.info("Realtime hub stopped")


__all__ = ["RealtimeHub"]
