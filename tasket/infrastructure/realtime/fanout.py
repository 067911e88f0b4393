"""Task, comment, typing and notification events for the rest of the system."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Literal, Union

from tasket.domain.entities import (
    ActorSummary,
    NotificationPushed,
    Task,
    TaskAssigned,
    TaskCommentAdded,
    TaskDeleted,
    TaskUpdated,
    UserStoppedTyping,
    UserSummary,
    UserTyping,
)

from .registry import department_room, task_room, user_room
from .router import BroadcastRouter

logger = logging.getLogger(__name__)

Actor = Union[ActorSummary, UserSummary, Mapping[str, Any]]
TaskLike = Union[Task, Mapping[str, Any]]


def as_actor(actor: Actor) -> ActorSummary:
    """Reduce any user representation to ``{id, name}``."""

    if isinstance(actor, ActorSummary):
        return actor
    if isinstance(actor, Mapping):
        return ActorSummary(id=actor["id"], name=actor.get("name", ""))
    return ActorSummary(id=actor.id, name=actor.name)


class EventFanout:
    """Route domain events to the department, task and user rooms."""

    def __init__(self, router: BroadcastRouter, clock: Callable[[], datetime]) -> None:
        self._router = router
        self._clock = clock

    async def task_created(self, task: TaskLike, actor: Actor) -> None:
        await self._broadcast_task_change(task, actor)

    async def task_updated(self, task: TaskLike, actor: Actor) -> None:
        await self._broadcast_task_change(task, actor)

    async def task_deleted(
        self, task_id: int, department_id: int | None, actor: Actor
    ) -> None:
        """Announce a deletion.

        ``department_id`` must be captured before the record is destroyed.
        """

        event = TaskDeleted(
            task_id=task_id, deleted_by=as_actor(actor), timestamp=self._clock()
        )
        if department_id:
            await self._router.emit(department_room(department_id), event)
        await self._router.emit(task_room(task_id), event)

    async def comment_added(self, comment: Mapping[str, Any], author: Actor) -> None:
        author_summary = as_actor(author)
        event = TaskCommentAdded(
            comment=comment, author=author_summary, timestamp=self._clock()
        )
        task_id = comment.get("task_id")
        if task_id:
            await self._router.emit(task_room(task_id), event)
        logger.debug("Task comment broadcasted by %s", author_summary.name)

    async def typing_started(
        self, connection_id: str, user: UserSummary, task_id: Any
    ) -> None:
        event = UserTyping(user_id=user.id, user_name=user.name, task_id=task_id)
        await self._router.emit(task_room(task_id), event, exclude=connection_id)

    async def typing_stopped(
        self, connection_id: str, user: UserSummary, task_id: Any
    ) -> None:
        event = UserStoppedTyping(user_id=user.id, task_id=task_id)
        await self._router.emit(task_room(task_id), event, exclude=connection_id)

    async def notification(
        self, recipient: int | Literal["all"], payload: Mapping[str, Any]
    ) -> int:
        """Push a notification to ``user_<recipient>`` or to everybody."""

        event = NotificationPushed(notification=payload, timestamp=self._clock())
        delivered = await self._router.emit_to_user(recipient, event)
        logger.debug("Notification sent to %s (%d connections)", recipient, delivered)
        return delivered

    async def _broadcast_task_change(self, task: TaskLike, actor: Actor) -> None:
        data = task.to_payload() if isinstance(task, Task) else task
        actor_summary = as_actor(actor)
        timestamp = self._clock()
        event = TaskUpdated(task=data, updated_by=actor_summary, timestamp=timestamp)

        department_id = data.get("department_id")
        if department_id:
            await self._router.emit(department_room(department_id), event)

        task_id = data.get("id")
        if task_id:
            await self._router.emit(task_room(task_id), event)

        assignee = data.get("assigned_to")
        if assignee and assignee != actor_summary.id:
            assigned = TaskAssigned(
                task=data, updated_by=actor_summary, timestamp=timestamp
            )
            await self._router.emit(user_room(assignee), assigned)

        logger.debug("Task update broadcasted by %s", actor_summary.name)


__all__ = ["EventFanout", "as_actor", "Actor", "TaskLike"]
