"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Query, Session

from tasket.domain.entities import Notification, NotificationPriority
from tasket.infrastructure.models import NotificationModel
from tasket.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(
        self,
        *,
        recipient_id: int,
        related_task_id: int | None,
        notification_type: str,
        unread_only: bool = True,
    ) -> bool:
        query = self.session.query(NotificationModel.id).filter(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.related_task_id == related_task_id,
            NotificationModel.type == notification_type,
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        return query.first() is not None

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        is_read: bool | None = None,
        notification_type: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[Sequence[Notification], int]:
        """Return one page of notifications (newest first) and the total count."""

        query = self._filtered(recipient_id, is_read, notification_type)
        total = query.count()
        models = (
            query.order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(
        self, notification_id: int, *, recipient_id: int
    ) -> Notification | None:
        model = self._get_owned_model(notification_id, recipient_id)
        if model is None:
            return None
        model.is_read = True
        model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, recipient_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.is_read.is_(False),
            )
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: int, *, recipient_id: int) -> bool:
        model = self._get_owned_model(notification_id, recipient_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _filtered(
        self,
        recipient_id: int,
        is_read: bool | None,
        notification_type: str | None,
    ) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id
        )
        if is_read is not None:
            query = query.filter(NotificationModel.is_read.is_(is_read))
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)
        return query

    def _get_owned_model(
        self, notification_id: int, recipient_id: int
    ) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.recipient_id == recipient_id,
            )
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        model.recipient_id = notification.recipient_id
        model.sender_id = notification.sender_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.related_task_id = notification.related_task_id
        model.related_project_id = notification.related_project_id
        model.is_read = notification.is_read
        model.priority = NotificationPriority(notification.priority).value
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            type=model.type,
            title=model.title,
            message=model.message,
            related_task_id=model.related_task_id,
            related_project_id=model.related_project_id,
            is_read=bool(model.is_read),
            priority=NotificationPriority(model.priority),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
