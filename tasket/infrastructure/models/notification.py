"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text

from tasket.infrastructure.database import Base
from tasket.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for recipient-addressed notifications."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index(
            "ix_notifications_dedup",
            "recipient_id",
            "related_task_id",
            "type",
            "is_read",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(
        Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True
    )
    type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    related_task_id = Column(
        Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True
    )
    # Projects live outside this service; only the identifier is kept.
    related_project_id = Column(Integer, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    priority = Column(String(10), nullable=False, default="medium")
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
