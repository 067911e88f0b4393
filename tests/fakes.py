"""Deterministic collaborators used by the unit tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

from tasket.domain.entities import Notification, Task, UserSummary
from tasket.domain.errors import AuthenticationError


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeConnection:
    """Connection that records every frame it is sent."""

    def __init__(self, connection_id: str, *, fail_on_send: bool = False) -> None:
        self.id = connection_id
        self.fail_on_send = fail_on_send
        self.sent: list[tuple[str, Any]] = []
        self.closed_code: int | None = None

    async def send(self, event: str, payload: Any) -> None:
        if self.fail_on_send:
            raise RuntimeError("socket is gone")
        self.sent.append((event, payload))

    async def close(self, code: int = 1000) -> None:
        self.closed_code = code

    def payloads(self, event: str) -> list[Any]:
        return [payload for name, payload in self.sent if name == event]

    def event_names(self) -> list[str]:
        return [name for name, _ in self.sent]


class FakeIdentityResolver:
    """Token table in front of a user table."""

    def __init__(self) -> None:
        self.tokens: dict[str, int] = {}
        self.users: dict[int, UserSummary] = {}

    def add_user(self, user: UserSummary, token: str | None = None) -> str:
        token = token or f"token-{user.id}"
        self.users[user.id] = user
        self.tokens[token] = user.id
        return token

    def verify(self, token: str | None) -> int:
        if not token or not isinstance(token, str):
            raise AuthenticationError("No token provided")
        if token.startswith("Bearer "):
            token = token[len("Bearer "):]
        if token not in self.tokens:
            raise AuthenticationError("Invalid token")
        return self.tokens[token]

    async def load_user_summary(self, user_id: int) -> UserSummary | None:
        return self.users.get(user_id)


class InMemoryNotificationStore:
    """Notification store kept in a list."""

    def __init__(self) -> None:
        self.items: list[Notification] = []
        self.fail_on_create = False
        self._next_id = 1

    async def exists(
        self,
        *,
        recipient_id: int,
        related_task_id: int | None,
        notification_type: str,
        unread_only: bool = True,
    ) -> bool:
        return any(
            item.recipient_id == recipient_id
            and item.related_task_id == related_task_id
            and item.type == notification_type
            and (not unread_only or not item.is_read)
            for item in self.items
        )

    async def create(self, notification: Notification) -> Notification:
        if self.fail_on_create:
            raise ConnectionError("store unavailable")
        saved = replace(notification, id=self._next_id)
        self._next_id += 1
        self.items.append(saved)
        return saved

    async def mark_read(
        self, notification_id: int, *, recipient_id: int
    ) -> Notification | None:
        for index, item in enumerate(self.items):
            if item.id == notification_id and item.recipient_id == recipient_id:
                updated = replace(item, is_read=True, read_at=item.created_at)
                self.items[index] = updated
                return updated
        return None

    async def delete(self, notification_id: int, *, recipient_id: int) -> bool:
        before = len(self.items)
        self.items = [
            item
            for item in self.items
            if not (item.id == notification_id and item.recipient_id == recipient_id)
        ]
        return len(self.items) != before

    async def list_for_recipient(
        self,
        recipient_id: int,
        *,
        is_read: bool | None = None,
        notification_type: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[Notification], int]:
        matches = [
            item
            for item in reversed(self.items)
            if item.recipient_id == recipient_id
            and (is_read is None or item.is_read is is_read)
            and (notification_type is None or item.type == notification_type)
        ]
        return matches[offset : offset + limit], len(matches)

    def unread_of_type(self, recipient_id: int, notification_type: str) -> list[Notification]:
        return [
            item
            for item in self.items
            if item.recipient_id == recipient_id
            and item.type == notification_type
            and not item.is_read
        ]


class FakeTaskQuery:
    """Task query over an in-memory list."""

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks = list(tasks or [])
        self.error: Exception | None = None

    async def find_tasks_due_within(
        self, *, now: datetime, horizon: timedelta, exclude_status: str
    ) -> Sequence[Task]:
        if self.error is not None:
            raise self.error
        return [
            task
            for task in self.tasks
            if task.due_date is not None
            and now < task.due_date <= now + horizon
            and task.status != exclude_status
        ]


def make_user(
    user_id: int,
    *,
    name: str | None = None,
    department_id: int | None = 10,
    role: str = "employee",
) -> UserSummary:
    return UserSummary(
        id=user_id,
        name=name or f"User {user_id}",
        email=f"user{user_id}@example.com",
        role=role,
        department_id=department_id,
        department_name=f"Department {department_id}" if department_id else None,
    )


def make_task(
    task_id: int,
    *,
    due_date: datetime,
    assigned_to: int | None = 1,
    priority: str = "medium",
    status: str = "planned",
    title: str | None = None,
    department_id: int | None = 10,
) -> Task:
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        status=status,
        priority=priority,
        due_date=due_date,
        assigned_to=assigned_to,
        department_id=department_id,
        created_by=99,
    )
