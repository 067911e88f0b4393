"""Public helpers for creating notifications and due-date reminders."""

from .due_dates import (
    DUE_DATE_REMINDER,
    URGENT_DUE_DATE_REMINDER,
    DueDateScanner,
    ReminderPolicy,
    SweepResult,
    upcoming_policy,
    urgent_policy,
)
from .producer import create_notification

__all__ = [
    "create_notification",
    "DUE_DATE_REMINDER",
    "URGENT_DUE_DATE_REMINDER",
    "DueDateScanner",
    "ReminderPolicy",
    "SweepResult",
    "upcoming_policy",
    "urgent_policy",
]
