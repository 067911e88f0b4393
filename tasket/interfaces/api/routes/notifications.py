"""Endpoints for reading and acknowledging notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from tasket.domain.entities import Notification, UserSummary
from tasket.infrastructure.database import get_db
from tasket.infrastructure.repositories import NotificationRepository
from tasket.interfaces.api.dependencies import get_current_user
from tasket.interfaces.api.schemas import (
    NotificationDeleteResponse,
    NotificationMarkAllReadResponse,
    NotificationMarkReadResponse,
    NotificationPage,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        sender_id=notification.sender_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        related_task_id=notification.related_task_id,
        related_project_id=notification.related_project_id,
        is_read=notification.is_read,
        priority=notification.priority,
        created_at=notification.created_at,
        read_at=notification.read_at,
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")


@router.get("/", response_model=NotificationPage)
def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    is_read: bool | None = Query(None),
    type: str | None = Query(None, max_length=50),
    db: Session = Depends(get_db),
    current_user: UserSummary = Depends(get_current_user),
) -> NotificationPage:
    """Return the recipient's notifications, newest first."""

    notifications, total = NotificationRepository(db).list_for_recipient(
        current_user.id,
        is_read=is_read,
        notification_type=type,
        limit=limit,
        offset=offset,
    )
    return NotificationPage(
        notifications=[_notification_to_schema(item) for item in notifications],
        total_count=total,
        limit=limit,
        offset=offset,
    )


@router.put("/read-all", response_model=NotificationMarkAllReadResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: UserSummary = Depends(get_current_user),
) -> NotificationMarkAllReadResponse:
    updated = NotificationRepository(db).mark_all_as_read(current_user.id)
    plural = "" if updated == 1 else "s"
    return NotificationMarkAllReadResponse(
        message=f"Marked {updated} notification{plural} as read",
        updated_count=updated,
    )


@router.put("/{notification_id}/read", response_model=NotificationMarkReadResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: UserSummary = Depends(get_current_user),
) -> NotificationMarkReadResponse:
    """Mark one of the caller's notifications as read.

    A read reminder no longer blocks the next due-date sweep from notifying
    again about the same task.
    """

    notification = NotificationRepository(db).mark_as_read(
        notification_id, recipient_id=current_user.id
    )
    if notification is None:
        raise _not_found()
    return NotificationMarkReadResponse(
        message="Notification marked as read",
        notification=_notification_to_schema(notification),
    )


@router.delete("/{notification_id}", response_model=NotificationDeleteResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: UserSummary = Depends(get_current_user),
) -> NotificationDeleteResponse:
    if not NotificationRepository(db).delete(notification_id, recipient_id=current_user.id):
        raise _not_found()
    return NotificationDeleteResponse(message="Notification deleted successfully")
