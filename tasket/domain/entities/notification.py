"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationPriority(str, Enum):
    """Urgency levels shared by notifications and tasks."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass
class Notification:
    """Message addressed to a single recipient.

    ``sender_id`` is ``None`` for system-generated notifications such as
    due-date reminders.
    """

    id: int | None
    recipient_id: int
    sender_id: int | None
    type: str
    title: str
    message: str
    related_task_id: int | None = None
    related_project_id: int | None = None
    is_read: bool = False
    priority: NotificationPriority = NotificationPriority.MEDIUM
    created_at: datetime | None = None
    read_at: datetime | None = None


__all__ = ["Notification", "NotificationPriority"]
