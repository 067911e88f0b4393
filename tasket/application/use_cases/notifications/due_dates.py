"""Scheduled sweeps that remind assignees about approaching due dates.

The notification store doubles as the deduplication ledger: a task is skipped
while its assignee still has an unread reminder of the same type for it. Once
that reminder is read, the next sweep notifies again.

The existence check and the insert are separate store calls, so two sweeps
interleaving on the same task can both create a reminder. That duplicate is
tolerated.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from tasket.application.ports import NotificationStore, TaskQuery
from tasket.domain.entities import (
    TASK_STATUS_COMPLETED,
    Notification,
    NotificationPriority,
    Task,
)
from tasket.domain.errors import SweepError
from tasket.infrastructure.realtime import EventFanout
from tasket.utils import now_in_app_timezone

from .producer import create_notification

logger = logging.getLogger(__name__)

DUE_DATE_REMINDER = "due_date_reminder"
URGENT_DUE_DATE_REMINDER = "urgent_due_date_reminder"


def _task_priority(priority: str | None) -> NotificationPriority:
    try:
        return NotificationPriority(priority)
    except ValueError:
        return NotificationPriority.MEDIUM


def _escalated_priority(priority: str | None) -> NotificationPriority:
    if _task_priority(priority) is NotificationPriority.URGENT:
        return NotificationPriority.URGENT
    return NotificationPriority.HIGH


@dataclass(frozen=True)
class ReminderPolicy:
    """What one sweep looks for and how it words the reminder."""

    notification_type: str
    title: str
    horizon: timedelta
    unit: timedelta
    unit_label: str
    priority_for: Callable[[str | None], NotificationPriority]

    def count_until(self, due_date: datetime, now: datetime) -> int:
        return math.ceil((due_date - now) / self.unit)

    def message_for(self, task: Task, count: int) -> str:
        plural = "" if count == 1 else "s"
        return f'Task "{task.title}" is due in {count} {self.unit_label}{plural}'


def upcoming_policy(horizon_days: int = 3) -> ReminderPolicy:
    return ReminderPolicy(
        notification_type=DUE_DATE_REMINDER,
        title="Task Due Soon",
        horizon=timedelta(days=horizon_days),
        unit=timedelta(days=1),
        unit_label="day",
        priority_for=_task_priority,
    )


def urgent_policy(horizon_hours: int = 24) -> ReminderPolicy:
    return ReminderPolicy(
        notification_type=URGENT_DUE_DATE_REMINDER,
        title="Urgent: Task Due Soon",
        horizon=timedelta(hours=horizon_hours),
        unit=timedelta(hours=1),
        unit_label="hour",
        priority_for=_escalated_priority,
    )


@dataclass
class SweepResult:
    """Outcome of one sweep."""

    notification_type: str
    created: list[Notification] = field(default_factory=list)
    skipped: int = 0
    failed: bool = False


class DueDateScanner:
    """Run the upcoming and urgent due-date sweeps."""

    def __init__(
        self,
        tasks: TaskQuery,
        store: NotificationStore,
        fanout: EventFanout,
        *,
        upcoming: ReminderPolicy | None = None,
        urgent: ReminderPolicy | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._tasks = tasks
        self._store = store
        self._fanout = fanout
        self.upcoming = upcoming or upcoming_policy()
        self.urgent = urgent or urgent_policy()
        self._clock = clock

    async def run_upcoming_sweep(self) -> SweepResult:
        return await self.run_sweep(self.upcoming)

    async def run_urgent_sweep(self) -> SweepResult:
        return await self.run_sweep(self.urgent)

    async def run_sweep(self, policy: ReminderPolicy) -> SweepResult:
        """Run one sweep. Never raises; failures are logged and flagged."""

        result = SweepResult(notification_type=policy.notification_type)
        try:
            await self._sweep(policy, result)
        except SweepError:
            result.failed = True
            logger.exception("Error checking %s due dates", policy.notification_type)

        logger.info(
            "Sweep %s finished: %d created, %d skipped%s",
            policy.notification_type,
            len(result.created),
            result.skipped,
            " (aborted)" if result.failed else "",
        )
        return result

    async def _sweep(self, policy: ReminderPolicy, result: SweepResult) -> None:
        now = self._clock()
        try:
            tasks = await self._tasks.find_tasks_due_within(
                now=now, horizon=policy.horizon, exclude_status=TASK_STATUS_COMPLETED
            )
            for task in tasks:
                if not task.assigned_to or task.due_date is None:
                    continue
                if await self._store.exists(
                    recipient_id=task.assigned_to,
                    related_task_id=task.id,
                    notification_type=policy.notification_type,
                    unread_only=True,
                ):
                    result.skipped += 1
                    continue
                notification = await self._remind(policy, task, now)
                if notification is not None:
                    result.created.append(notification)
        except Exception as exc:
            raise SweepError(policy.notification_type, exc) from exc

    async def _remind(
        self, policy: ReminderPolicy, task: Task, now: datetime
    ) -> Notification | None:
        message = policy.message_for(task, policy.count_until(task.due_date, now))
        priority = policy.priority_for(task.priority)
        notification = await create_notification(
            self._store,
            recipient_id=task.assigned_to,
            sender_id=None,
            notification_type=policy.notification_type,
            title=policy.title,
            message=message,
            related_task_id=task.id,
            priority=priority,
            clock=self._clock,
        )
        if notification is None:
            return None

        await self._fanout.notification(
            task.assigned_to,
            {
                "id": notification.id,
                "type": policy.notification_type,
                "title": policy.title,
                "message": message,
                "data": task.to_payload(),
                "priority": priority.value,
                "timestamp": notification.created_at,
            },
        )
        return notification


__all__ = [
    "DUE_DATE_REMINDER",
    "URGENT_DUE_DATE_REMINDER",
    "ReminderPolicy",
    "SweepResult",
    "DueDateScanner",
    "upcoming_policy",
    "urgent_policy",
]
