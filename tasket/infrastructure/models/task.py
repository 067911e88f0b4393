"""SQLAlchemy model for the task table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from tasket.infrastructure.database import Base
from tasket.utils import now_in_app_naive_datetime


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="planned", index=True)
    priority = Column(String(10), nullable=False, default="medium")
    due_date = Column(DateTime(), nullable=True, index=True)
    assigned_to = Column(
        Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["TaskModel"]
