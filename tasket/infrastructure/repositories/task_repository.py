"""Task queries used by the due-date reminder sweeps."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from tasket.domain.entities import Task
from tasket.infrastructure.models import TaskModel
from tasket.utils import ensure_app_naive_datetime, ensure_app_timezone


class TaskRepository:
    """Query tasks by due date."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_due_between(
        self,
        *,
        after: datetime,
        until: datetime,
        exclude_status: str,
    ) -> Sequence[Task]:
        """Return tasks due in ``(after, until]`` whose status is not ``exclude_status``."""

        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.due_date > ensure_app_naive_datetime(after))
            .filter(TaskModel.due_date <= ensure_app_naive_datetime(until))
            .filter(TaskModel.status != exclude_status)
            .order_by(TaskModel.due_date.asc(), TaskModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            status=model.status,
            priority=model.priority,
            due_date=ensure_app_timezone(model.due_date),
            assigned_to=model.assigned_to,
            department_id=model.department_id,
            created_by=model.created_by,
            description=model.description,
        )


__all__ = ["TaskRepository"]
