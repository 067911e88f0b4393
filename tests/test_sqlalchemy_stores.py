"""Integration tests for the SQLAlchemy-backed collaborators."""

from __future__ import annotations

from datetime import timedelta

import pytest

from tasket.domain.entities import Notification, NotificationPriority
from tasket.domain.errors import AuthenticationError
from tasket.infrastructure.models import DepartmentModel, EmployeeModel, TaskModel
from tasket.infrastructure.repositories import NotificationRepository
from tasket.infrastructure.security import create_access_token
from tasket.infrastructure.stores import (
    JWTIdentityResolver,
    SqlAlchemyNotificationStore,
    SqlAlchemyTaskQuery,
)
from tasket.utils import ensure_app_naive_datetime


@pytest.fixture()
def people(seed):
    seed(DepartmentModel(id=10, name="Engineering"))
    return seed(
        EmployeeModel(id=1, name="Ana", email="ana@example.com", department_id=10),
        EmployeeModel(id=2, name="Bo", email="bo@example.com", role="manager"),
        EmployeeModel(id=3, name="Cy", email="cy@example.com", is_active=False),
    )


def _notification(recipient_id, *, task_id=None, notification_type="task_assigned", clock=None):
    return Notification(
        id=None,
        recipient_id=recipient_id,
        sender_id=None,
        type=notification_type,
        title="Title",
        message="Message",
        related_task_id=task_id,
        priority=NotificationPriority.HIGH,
        created_at=clock() if clock else None,
    )


@pytest.mark.asyncio
async def test_identity_resolver_loads_active_employee(database, people):
    resolver = JWTIdentityResolver(database.SessionLocal)
    token = create_access_token({"sub": "1"})

    user_id = resolver.verify(f"Bearer {token}")
    user = await resolver.load_user_summary(user_id)

    assert user is not None
    assert (user.id, user.name, user.department_id, user.department_name) == (
        1,
        "Ana",
        10,
        "Engineering",
    )
    assert await resolver.load_user_summary(3) is None
    assert await resolver.load_user_summary(404) is None


@pytest.mark.parametrize(
    "token",
    [None, "", "not-a-jwt", create_access_token({"sub": "1"}, timedelta(minutes=-1))],
)
def test_identity_resolver_rejects_bad_tokens(database, token):
    resolver = JWTIdentityResolver(database.SessionLocal)

    with pytest.raises(AuthenticationError):
        resolver.verify(token)


def test_identity_resolver_rejects_token_without_numeric_subject(database):
    resolver = JWTIdentityResolver(database.SessionLocal)

    with pytest.raises(AuthenticationError) as exc_info:
        resolver.verify(create_access_token({"sub": "ana"}))

    assert exc_info.value.reason == "Invalid token"


@pytest.mark.asyncio
async def test_task_query_uses_half_open_window(database, people, seed, clock):
    now = clock.now
    naive = ensure_app_naive_datetime
    seed(
        TaskModel(id=1, title="Past", due_date=naive(now - timedelta(hours=1)), assigned_to=1),
        TaskModel(id=2, title="Edge", due_date=naive(now), assigned_to=1),
        TaskModel(id=3, title="Soon", due_date=naive(now + timedelta(hours=5)), assigned_to=1),
        TaskModel(id=4, title="Limit", due_date=naive(now + timedelta(hours=24)), assigned_to=1),
        TaskModel(id=5, title="Late", due_date=naive(now + timedelta(hours=25)), assigned_to=1),
        TaskModel(
            id=6,
            title="Done",
            status="completed",
            due_date=naive(now + timedelta(hours=2)),
            assigned_to=1,
        ),
        TaskModel(id=7, title="No date", assigned_to=1),
    )

    tasks = await SqlAlchemyTaskQuery(database.SessionLocal).find_tasks_due_within(
        now=now, horizon=timedelta(hours=24), exclude_status="completed"
    )

    assert [task.id for task in tasks] == [3, 4]
    assert tasks[0].due_date == now + timedelta(hours=5)


@pytest.mark.asyncio
async def test_notification_store_exists_tracks_unread_state(database, people, seed, clock):
    seed(TaskModel(id=5, title="Ship", assigned_to=1))
    store = SqlAlchemyNotificationStore(database.SessionLocal)

    created = await store.create(_notification(1, task_id=5, clock=clock))

    assert created.id is not None
    assert created.created_at == clock.now
    assert await store.exists(
        recipient_id=1, related_task_id=5, notification_type="task_assigned"
    )
    assert not await store.exists(
        recipient_id=1, related_task_id=5, notification_type="due_date_reminder"
    )

    read = await store.mark_read(created.id, recipient_id=1)

    assert read is not None and read.is_read and read.read_at is not None
    assert not await store.exists(
        recipient_id=1, related_task_id=5, notification_type="task_assigned"
    )
    assert await store.exists(
        recipient_id=1,
        related_task_id=5,
        notification_type="task_assigned",
        unread_only=False,
    )


@pytest.mark.asyncio
async def test_notification_store_is_scoped_to_recipient(database, people):
    store = SqlAlchemyNotificationStore(database.SessionLocal)
    created = await store.create(_notification(1))

    assert await store.mark_read(created.id, recipient_id=2) is None
    assert await store.delete(created.id, recipient_id=2) is False
    assert await store.delete(created.id, recipient_id=1) is True
    assert await store.delete(created.id, recipient_id=1) is False


@pytest.mark.asyncio
async def test_list_for_recipient_filters_and_paginates(database, people, clock):
    store = SqlAlchemyNotificationStore(database.SessionLocal)
    for index in range(3):
        clock.advance(minutes=1)
        await store.create(_notification(1, notification_type="comment", clock=clock))
    clock.advance(minutes=1)
    reminder = await store.create(
        _notification(1, notification_type="due_date_reminder", clock=clock)
    )
    await store.create(_notification(2, clock=clock))
    await store.mark_read(reminder.id, recipient_id=1)

    newest_two, total = await store.list_for_recipient(1, limit=2)
    comments, comment_total = await store.list_for_recipient(1, notification_type="comment")
    read, read_total = await store.list_for_recipient(1, is_read=True)

    assert total == 4
    assert [item.id for item in newest_two] == [reminder.id, reminder.id - 1]
    assert comment_total == 3 and len(comments) == 3
    assert read_total == 1 and read[0].id == reminder.id


def test_mark_all_as_read_counts_only_unread(database, people):
    with database.SessionLocal() as session:
        repository = NotificationRepository(session)
        first = repository.create(_notification(1))
        repository.create(_notification(1))
        repository.create(_notification(2))
        repository.mark_as_read(first.id, recipient_id=1)

        assert repository.mark_all_as_read(1) == 1
        assert repository.mark_all_as_read(1) == 0
        assert repository.mark_as_read(first.id, recipient_id=2) is None
