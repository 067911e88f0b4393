"""Read access to employee records for identity resolution."""

from __future__ import annotations

from sqlalchemy.orm import Session

from tasket.domain.entities import UserSummary
from tasket.infrastructure.models import EmployeeModel


class EmployeeRepository:
    """Load public employee summaries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_active_summary(self, employee_id: int) -> UserSummary | None:
        """Return the summary for an active employee or ``None``."""

        model = (
            self.session.query(EmployeeModel)
            .filter(EmployeeModel.id == employee_id)
            .filter(EmployeeModel.is_active.is_(True))
            .first()
        )
        return self._to_summary(model) if model else None

    @staticmethod
    def _to_summary(model: EmployeeModel) -> UserSummary:
        return UserSummary(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            department_id=model.department_id,
            department_name=model.department.name if model.department else None,
        )


__all__ = ["EmployeeRepository"]
