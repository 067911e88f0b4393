"""Cron-driven execution of the due-date reminder sweeps."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from tasket.application.use_cases.notifications import DueDateScanner
from tasket.config import Settings
from tasket.utils import get_app_timezone

logger = logging.getLogger(__name__)

UPCOMING_JOB_ID = "upcoming_due_date_reminders"
URGENT_JOB_ID = "urgent_due_date_reminders"


class ReminderScheduler:
    """Register both sweeps as independent jobs on the application event loop.

    The jobs never block each other; each one only refuses to overlap with
    its own previous run.
    """

    def __init__(
        self,
        scanner: DueDateScanner,
        settings: Settings,
        *,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        self._scanner = scanner
        self._settings = settings
        self._scheduler = scheduler or AsyncIOScheduler(timezone=get_app_timezone())

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        """Add the jobs and start the scheduler. Must run inside the event loop."""

        if self._scheduler.running:
            logger.info("Reminder scheduler already running, skipping initialization")
            return

        timezone = get_app_timezone()
        self._scheduler.add_job(
            self._scanner.run_upcoming_sweep,
            trigger=CronTrigger.from_crontab(
                self._settings.upcoming_reminder_cron, timezone=timezone
            ),
            id=UPCOMING_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.add_job(
            self._scanner.run_urgent_sweep,
            trigger=CronTrigger.from_crontab(
                self._settings.urgent_reminder_cron, timezone=timezone
            ),
            id=URGENT_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(
            "Reminder scheduler started: upcoming '%s', urgent '%s'",
            self._settings.upcoming_reminder_cron,
            self._settings.urgent_reminder_cron,
        )

    def job_ids(self) -> list[str]:
        return [job.id for job in self._scheduler.get_jobs()]

    def shutdown(self) -> None:
        if not self._scheduler.running:
            return
        self._scheduler.shutdown(wait=False)
        logger.info("Reminder scheduler stopped")


__all__ = ["ReminderScheduler", "UPCOMING_JOB_ID", "URGENT_JOB_ID"]
