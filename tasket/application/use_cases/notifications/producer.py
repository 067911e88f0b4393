"""Single funnel for creating notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from tasket.application.ports import NotificationStore
from tasket.domain.entities import Notification, NotificationPriority
from tasket.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


async def create_notification(
    store: NotificationStore,
    *,
    recipient_id: int,
    sender_id: int | None,
    notification_type: str,
    title: str,
    message: str,
    related_task_id: int | None = None,
    related_project_id: int | None = None,
    priority: NotificationPriority | str = NotificationPriority.MEDIUM,
    clock: Callable[[], datetime] = now_in_app_timezone,
) -> Notification | None:
    """Persist a notification unless the recipient would be notifying themselves.

    Returns ``None`` without writing anything when ``recipient_id`` equals
    ``sender_id``.
    """

    if sender_id is not None and recipient_id == sender_id:
        logger.debug(
            "Suppressed self-notification %s for user %s", notification_type, recipient_id
        )
        return None

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=notification_type,
        title=title,
        message=message,
        related_task_id=related_task_id,
        related_project_id=related_project_id,
        is_read=False,
        priority=NotificationPriority(priority),
        created_at=clock(),
        read_at=None,
    )
    return await store.create(notification)


__all__ = ["create_notification"]
