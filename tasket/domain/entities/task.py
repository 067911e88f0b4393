"""Domain entity representing a task as seen by the reminder scanner."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tasket.utils import isoformat_or_none

TASK_STATUS_PLANNED = "planned"
TASK_STATUS_IN_PROGRESS = "in-progress"
TASK_STATUS_COMPLETED = "completed"
TASK_STATUS_CANCELLED = "cancelled"


@dataclass
class Task:
    """Subset of task attributes needed for reminders and realtime fan-out."""

    id: int | None
    title: str
    status: str
    priority: str
    due_date: datetime | None
    assigned_to: int | None
    department_id: int | None
    created_by: int | None = None
    description: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot with storage-style keys."""

        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "due_date": isoformat_or_none(self.due_date),
            "assigned_to": self.assigned_to,
            "department_id": self.department_id,
            "created_by": self.created_by,
        }


__all__ = [
    "Task",
    "TASK_STATUS_PLANNED",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_COMPLETED",
    "TASK_STATUS_CANCELLED",
]
