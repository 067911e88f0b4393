"""Collaborator interfaces consumed by the realtime and reminder services."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Protocol

from tasket.domain.entities import Notification, Task, UserSummary


class IdentityResolver(Protocol):
    def verify(self, token: str | None) -> int:
        """Return the user id encoded in ``token`` or raise ``AuthenticationError``."""

    async def load_user_summary(self, user_id: int) -> UserSummary | None: ...


class TaskQuery(Protocol):
    async def find_tasks_due_within(
        self, *, now: datetime, horizon: timedelta, exclude_status: str
    ) -> Sequence[Task]:
        """Return tasks due in ``(now, now + horizon]`` not in ``exclude_status``."""


class NotificationStore(Protocol):
    async def exists(
        self,
        *,
        recipient_id: int,
        related_task_id: int | None,
        notification_type: str,
        unread_only: bool = True,
    ) -> bool: ...

    async def create(self, notification: Notification) -> Notification: ...

    async def mark_read(
        self, notification_id: int, *, recipient_id: int
    ) -> Notification | None: ...

    async def delete(self, notification_id: int, *, recipient_id: int) -> bool: ...

    async def list_for_recipient(
        self,
        recipient_id: int,
        *,
        is_read: bool | None = None,
        notification_type: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[Notification], int]: ...


__all__ = ["IdentityResolver", "TaskQuery", "NotificationStore"]
