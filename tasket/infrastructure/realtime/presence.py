"""Online/offline presence derived from registry changes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from tasket.domain.entities import PresenceStatus, UserPresence, UserSummary

from .registry import ConnectionRegistry, department_room
from .router import BroadcastRouter

logger = logging.getLogger(__name__)


class PresenceTracker:
    """Broadcast presence to department rooms. Keeps no history."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        router: BroadcastRouter,
        clock: Callable[[], datetime],
    ) -> None:
        self._registry = registry
        self._router = router
        self._clock = clock

    async def online(self, user: UserSummary) -> int:
        return await self._broadcast(user, "online")

    async def offline(self, user: UserSummary) -> int:
        return await self._broadcast(user, "offline")

    def online_users_in_department(self, department_id: int) -> list[dict[str, object]]:
        """Return distinct authenticated users connected to the department room."""

        seen: set[int] = set()
        users: list[dict[str, object]] = []
        for user in self._registry.member_identities(department_room(department_id)):
            if user.id in seen:
                continue
            seen.add(user.id)
            users.append({"id": user.id, "name": user.name, "role": user.role})
        return users

    def connected_users_count(self) -> int:
        return len(self._registry.authenticated_user_ids())

    async def _broadcast(self, user: UserSummary, status: PresenceStatus) -> int:
        logger.info("User presence update: %s is %s", user.name, status)
        if user.department_id is None:
            return 0
        event = UserPresence(
            user_id=user.id,
            user_name=user.name,
            status=status,
            timestamp=self._clock(),
        )
        return await self._router.emit(department_room(user.department_id), event)


__all__ = ["PresenceTracker"]
