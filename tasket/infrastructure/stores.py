"""Async collaborators backed by the SQLAlchemy repositories.

Repositories are synchronous; every call is executed in a worker thread so the
event loop keeps serving connections while the database is busy.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from functools import partial
from typing import TypeVar

from anyio import to_thread
from sqlalchemy.orm import Session

from tasket.domain.entities import Notification, Task, UserSummary
from tasket.infrastructure.repositories import (
    EmployeeRepository,
    NotificationRepository,
    TaskRepository,
)
from tasket.infrastructure.security import resolve_user_id

T = TypeVar("T")

SessionFactory = Callable[[], Session]


class _SessionScoped:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    async def _run(self, func: Callable[[Session], T]) -> T:
        return await to_thread.run_sync(partial(self._in_session, func))

    def _in_session(self, func: Callable[[Session], T]) -> T:
        with self._session_factory() as session:
            return func(session)


class JWTIdentityResolver(_SessionScoped):
    """Resolve bearer tokens to active employees."""

    def verify(self, token: str | None) -> int:
        return resolve_user_id(token)

    async def load_user_summary(self, user_id: int) -> UserSummary | None:
        return await self._run(
            lambda session: EmployeeRepository(session).get_active_summary(user_id)
        )


class SqlAlchemyTaskQuery(_SessionScoped):
    async def find_tasks_due_within(
        self, *, now: datetime, horizon: timedelta, exclude_status: str
    ) -> Sequence[Task]:
        return await self._run(
            lambda session: TaskRepository(session).list_due_between(
                after=now, until=now + horizon, exclude_status=exclude_status
            )
        )


class SqlAlchemyNotificationStore(_SessionScoped):
    async def exists(
        self,
        *,
        recipient_id: int,
        related_task_id: int | None,
        notification_type: str,
        unread_only: bool = True,
    ) -> bool:
        return await self._run(
            lambda session: NotificationRepository(session).exists(
                recipient_id=recipient_id,
                related_task_id=related_task_id,
                notification_type=notification_type,
                unread_only=unread_only,
            )
        )

    async def create(self, notification: Notification) -> Notification:
        return await self._run(
            lambda session: NotificationRepository(session).create(notification)
        )

    async def mark_read(
        self, notification_id: int, *, recipient_id: int
    ) -> Notification | None:
        return await self._run(
            lambda session: NotificationRepository(session).mark_as_read(
                notification_id, recipient_id=recipient_id
            )
        )

    async def delete(self, notification_id: int, *, recipient_id: int) -> bool:
        return await self._run(
            lambda session: NotificationRepository(session).delete(
                notification_id, recipient_id=recipient_id
            )
        )

    async def list_for_recipient(
        self,
        recipient_id: int,
        *,
        is_read: bool | None = None,
        notification_type: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[Notification], int]:
        return await self._run(
            lambda session: NotificationRepository(session).list_for_recipient(
                recipient_id,
                is_read=is_read,
                notification_type=notification_type,
                limit=limit,
                offset=offset,
            )
        )


__all__ = [
    "JWTIdentityResolver",
    "SqlAlchemyTaskQuery",
    "SqlAlchemyNotificationStore",
]
