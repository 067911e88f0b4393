"""Domain entities exposed by the application."""

from .notification import Notification, NotificationPriority
from .realtime_event import (
    ActorSummary,
    Authenticated,
    AuthError,
    DirectMessage,
    JoinedRoom,
    LeftRoom,
    NotificationPushed,
    PresenceStatus,
    RealtimeEvent,
    TaskAssigned,
    TaskCommentAdded,
    TaskDeleted,
    TaskUpdated,
    UserPresence,
    UserStoppedTyping,
    UserTyping,
    to_jsonable,
)
from .task import (
    TASK_STATUS_CANCELLED,
    TASK_STATUS_COMPLETED,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_PLANNED,
    Task,
)
from .user import UserSummary

__all__ = [
    "Notification",
    "NotificationPriority",
    "ActorSummary",
    "Authenticated",
    "AuthError",
    "DirectMessage",
    "JoinedRoom",
    "LeftRoom",
    "NotificationPushed",
    "PresenceStatus",
    "RealtimeEvent",
    "TaskAssigned",
    "TaskCommentAdded",
    "TaskDeleted",
    "TaskUpdated",
    "UserPresence",
    "UserStoppedTyping",
    "UserTyping",
    "to_jsonable",
    "Task",
    "TASK_STATUS_PLANNED",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_COMPLETED",
    "TASK_STATUS_CANCELLED",
    "UserSummary",
]
