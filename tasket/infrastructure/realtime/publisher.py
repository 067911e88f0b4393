"""Fire-and-forget entry points for request handlers and background jobs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Mapping
from typing import Any, Literal

from anyio import from_thread

from .fanout import Actor, EventFanout, TaskLike

logger = logging.getLogger(__name__)


class RealtimePublisher:
    """Schedule realtime fan-out without making the caller wait or fail.

    Callable from the event loop (delivery becomes a task on that loop) or
    from a worker thread started by anyio, such as a synchronous FastAPI
    handler (delivery is handed back to the loop). Errors are logged only.
    """

    def __init__(self, fanout: EventFanout) -> None:
        self._fanout = fanout
        self._pending: set[asyncio.Task[None]] = set()

    def on_task_created(self, task: TaskLike, actor: Actor) -> asyncio.Task[None] | None:
        return self._schedule("task_created", self._fanout.task_created(task, actor))

    def on_task_updated(self, task: TaskLike, actor: Actor) -> asyncio.Task[None] | None:
        return self._schedule("task_updated", self._fanout.task_updated(task, actor))

    def on_task_deleted(
        self, task_id: int, department_id: int | None, actor: Actor
    ) -> asyncio.Task[None] | None:
        return self._schedule(
            "task_deleted", self._fanout.task_deleted(task_id, department_id, actor)
        )

    def on_comment_added(
        self, comment: Mapping[str, Any], author: Actor
    ) -> asyncio.Task[None] | None:
        return self._schedule("comment_added", self._fanout.comment_added(comment, author))

    def broadcast_to_user(
        self, user_id: int | Literal["all"], payload: Mapping[str, Any]
    ) -> asyncio.Task[None] | None:
        return self._schedule("notification", self._fanout.notification(user_id, payload))

    async def drain(self) -> None:
        """Wait for every delivery scheduled on the running loop."""

        while self._pending:
            await asyncio.gather(*tuple(self._pending), return_exceptions=True)

    def _schedule(
        self, label: str, coro: Coroutine[Any, Any, Any]
    ) -> asyncio.Task[None] | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._guard, label, coro)
            except RuntimeError:
                coro.close()
                logger.warning("No event loop available; dropped realtime %s event", label)
            return None

        task = loop.create_task(self._guard(label, coro))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @staticmethod
    async def _guard(label: str, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            await coro
        except Exception:
            logger.exception("Realtime %s fan-out failed", label)


__all__ = ["RealtimePublisher"]
