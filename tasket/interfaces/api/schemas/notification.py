"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from tasket.domain.entities import NotificationPriority


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    sender_id: int | None = None
    type: str
    title: str
    message: str
    related_task_id: int | None = None
    related_project_id: int | None = None
    is_read: bool = False
    priority: NotificationPriority = NotificationPriority.MEDIUM
    created_at: datetime
    read_at: datetime | None = None


class NotificationPage(BaseModel):
    """One page of the recipient's notifications."""

    notifications: list[NotificationRead] = Field(default_factory=list)
    total_count: int
    limit: int
    offset: int


class NotificationMarkReadResponse(BaseModel):
    message: str
    notification: NotificationRead


class NotificationMarkAllReadResponse(BaseModel):
    message: str
    updated_count: int


class NotificationDeleteResponse(BaseModel):
    message: str


__all__ = [
    "NotificationRead",
    "NotificationPage",
    "NotificationMarkReadResponse",
    "NotificationMarkAllReadResponse",
    "NotificationDeleteResponse",
]
