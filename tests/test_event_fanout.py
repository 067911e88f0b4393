"""Tests for task, comment and notification fan-out."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from tasket.domain.entities import ActorSummary, JoinedRoom, Task
from tasket.infrastructure.realtime import as_actor

from tests.fakes import FakeConnection, make_user


def _member(hub, connection_id, user, *rooms):
    connection = FakeConnection(connection_id)
    hub.registry.add(connection)
    hub.registry.bind(connection_id, user)
    for room in rooms:
        hub.registry.join(connection_id, room)
    return connection


def test_as_actor_accepts_users_mappings_and_summaries():
    expected = ActorSummary(id=3, name="Cy")

    assert as_actor(make_user(3, name="Cy")) == expected
    assert as_actor({"id": 3, "name": "Cy", "email": "x"}) == expected
    assert as_actor(expected) is expected


@pytest.mark.asyncio
async def test_task_update_reaches_department_task_and_assignee(hub, clock):
    colleague = _member(hub, "dept", make_user(2), "department_10")
    watcher = _member(hub, "watch", make_user(3), "task_5")
    assignee = _member(hub, "assignee", make_user(4), "user_4")
    actor = make_user(1, name="Ana")
    task = {"id": 5, "title": "Ship", "department_id": 10, "assigned_to": 4}

    await hub.fanout.task_updated(task, actor)

    expected = {
        "task": task,
        "updatedBy": {"id": 1, "name": "Ana"},
        "timestamp": clock.now.isoformat(),
    }
    assert colleague.payloads("task_updated") == [expected]
    assert watcher.payloads("task_updated") == [expected]
    assert assignee.payloads("task_assigned") == [expected]


@pytest.mark.asyncio
async def test_self_assignment_does_not_emit_task_assigned(hub):
    actor = make_user(4)
    assignee = _member(hub, "assignee", actor, "user_4")

    await hub.fanout.task_created({"id": 5, "assigned_to": 4}, actor)

    assert assignee.payloads("task_assigned") == []


@pytest.mark.asyncio
async def test_task_entities_are_serialized(hub):
    due = datetime(2024, 5, 8, 12, 0, tzinfo=timezone.utc)
    task = Task(
        id=5,
        title="Ship",
        status="planned",
        priority="high",
        due_date=due,
        assigned_to=None,
        department_id=10,
    )
    colleague = _member(hub, "dept", make_user(2), "department_10")

    await hub.fanout.task_created(task, make_user(1))

    [payload] = colleague.payloads("task_updated")
    assert payload["task"]["due_date"] == due.isoformat()
    assert payload["task"]["priority"] == "high"


@pytest.mark.asyncio
async def test_datetimes_in_task_mappings_become_iso_strings(hub):
    due = datetime(2024, 5, 8, 12, 0, tzinfo=timezone.utc)
    task = {"id": 5, "due_date": due}
    watcher = _member(hub, "watch", make_user(3), "task_5")

    await hub.fanout.task_updated(task, make_user(1))

    assert watcher.payloads("task_updated")[0]["task"]["due_date"] == due.isoformat()
    assert task["due_date"] is due


@pytest.mark.asyncio
async def test_deleted_task_reaches_department_and_task_rooms(hub, clock):
    colleague = _member(hub, "dept", make_user(2), "department_10")
    watcher = _member(hub, "watch", make_user(3), "task_5")

    await hub.fanout.task_deleted(5, 10, {"id": 1, "name": "Ana"})

    expected = {
        "taskId": 5,
        "deletedBy": {"id": 1, "name": "Ana"},
        "timestamp": clock.now.isoformat(),
    }
    assert colleague.payloads("task_deleted") == [expected]
    assert watcher.payloads("task_deleted") == [expected]


@pytest.mark.asyncio
async def test_comments_only_reach_the_task_room(hub):
    colleague = _member(hub, "dept", make_user(2), "department_10")
    watcher = _member(hub, "watch", make_user(3), "task_5")
    comment = {"id": 1, "task_id": 5, "content": "Looks good"}

    await hub.fanout.comment_added(comment, make_user(1, name="Ana"))

    [payload] = watcher.payloads("task_comment_added")
    assert payload["comment"] == comment
    assert payload["author"] == {"id": 1, "name": "Ana"}
    assert colleague.sent == []


@pytest.mark.asyncio
async def test_empty_room_is_not_an_error(hub):
    assert await hub.router.emit("task_404", JoinedRoom(room="task_404")) == 0


@pytest.mark.asyncio
async def test_failed_delivery_does_not_stop_other_recipients(hub):
    broken = FakeConnection("broken", fail_on_send=True)
    hub.registry.add(broken)
    hub.registry.join("broken", "user_1")
    healthy = _member(hub, "healthy", make_user(1), "user_1")

    delivered = await hub.fanout.notification(1, {"title": "Hi"})

    assert delivered == 1
    assert healthy.payloads("notification")[0]["notification"] == {"title": "Hi"}


@pytest.mark.asyncio
async def test_notification_to_all_reaches_every_authenticated_connection(hub):
    first = _member(hub, "first", make_user(1))
    second = _member(hub, "second", make_user(2), "department_10")
    anonymous = FakeConnection("anon")
    hub.registry.add(anonymous)

    assert await hub.fanout.notification("all", {"title": "Maintenance"}) == 2
    assert first.payloads("notification") and second.payloads("notification")
    assert anonymous.sent == []


@pytest.mark.asyncio
async def test_publisher_schedules_delivery_on_running_loop(hub):
    watcher = _member(hub, "watch", make_user(3), "task_5")

    task = hub.publisher.on_task_updated({"id": 5}, make_user(1))
    assert isinstance(task, asyncio.Task)
    assert watcher.sent == []

    await hub.publisher.drain()

    assert watcher.event_names() == ["task_updated"]


@pytest.mark.asyncio
async def test_publisher_swallows_fanout_errors(hub, caplog):
    async def explode(*_args):
        raise RuntimeError("boom")

    hub.fanout.task_deleted = explode

    hub.publisher.on_task_deleted(5, 10, make_user(1))
    await hub.publisher.drain()

    assert "Realtime task_deleted fan-out failed" in caplog.text


def test_publisher_without_event_loop_drops_event(hub, caplog):
    assert hub.publisher.broadcast_to_user(1, {"title": "Hi"}) is None
    assert "dropped realtime notification event" in caplog.text
