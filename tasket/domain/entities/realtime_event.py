"""Outbound realtime events exchanged with websocket clients.

Each outbound event name of the wire contract has exactly one class here. The
class attribute ``event`` is the frame ``type`` and :meth:`to_payload` builds
the frame ``data``.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Literal

from .user import UserSummary

PresenceStatus = Literal["online", "offline"]


@dataclass(frozen=True)
class ActorSummary:
    """Identity of the user responsible for a change."""

    id: int
    name: str

    @classmethod
    def from_user(cls, user: UserSummary) -> "ActorSummary":
        return cls(id=user.id, name=user.name)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


class RealtimeEvent:
    """Base class for every outbound event."""

    event: ClassVar[str]

    def to_payload(self) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError


@dataclass(frozen=True)
class Authenticated(RealtimeEvent):
    event: ClassVar[str] = "authenticated"

    user: UserSummary

    def to_payload(self) -> dict[str, Any]:
        return {"user": self.user.to_public_dict()}


@dataclass(frozen=True)
class AuthError(RealtimeEvent):
    event: ClassVar[str] = "auth_error"

    message: str = "Authentication failed"

    def to_payload(self) -> dict[str, Any]:
        return {"message": self.message}


@dataclass(frozen=True)
class JoinedRoom(RealtimeEvent):
    event: ClassVar[str] = "joined_room"

    room: str

    def to_payload(self) -> dict[str, Any]:
        return {"room": self.room}


@dataclass(frozen=True)
class LeftRoom(RealtimeEvent):
    event: ClassVar[str] = "left_room"

    room: str

    def to_payload(self) -> dict[str, Any]:
        return {"room": self.room}


@dataclass(frozen=True)
class TaskUpdated(RealtimeEvent):
    """Task lifecycle change. Also used for task creation."""

    event: ClassVar[str] = "task_updated"

    task: Mapping[str, Any]
    updated_by: ActorSummary
    timestamp: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "task": to_jsonable(self.task),
            "updatedBy": self.updated_by.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class TaskAssigned(TaskUpdated):
    event: ClassVar[str] = "task_assigned"


@dataclass(frozen=True)
class TaskDeleted(RealtimeEvent):
    event: ClassVar[str] = "task_deleted"

    task_id: int
    deleted_by: ActorSummary
    timestamp: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "taskId": self.task_id,
            "deletedBy": self.deleted_by.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class TaskCommentAdded(RealtimeEvent):
    event: ClassVar[str] = "task_comment_added"

    comment: Mapping[str, Any]
    author: ActorSummary
    timestamp: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "comment": to_jsonable(self.comment),
            "author": self.author.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class UserPresence(RealtimeEvent):
    event: ClassVar[str] = "user_presence"

    user_id: int
    user_name: str
    status: PresenceStatus
    timestamp: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "status": self.status,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class UserTyping(RealtimeEvent):
    event: ClassVar[str] = "user_typing"

    user_id: int
    user_name: str
    task_id: Any

    def to_payload(self) -> dict[str, Any]:
        return {"userId": self.user_id, "userName": self.user_name, "taskId": self.task_id}


@dataclass(frozen=True)
class UserStoppedTyping(RealtimeEvent):
    event: ClassVar[str] = "user_stopped_typing"

    user_id: int
    task_id: Any

    def to_payload(self) -> dict[str, Any]:
        return {"userId": self.user_id, "taskId": self.task_id}


@dataclass(frozen=True)
class NotificationPushed(RealtimeEvent):
    event: ClassVar[str] = "notification"

    notification: Mapping[str, Any]
    timestamp: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "notification": to_jsonable(self.notification),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class DirectMessage(RealtimeEvent):
    event: ClassVar[str] = "direct_message"

    message: Any

    def to_payload(self) -> Any:
        return to_jsonable(self.message)


def to_jsonable(value: Any) -> Any:
    """Return a deep copy of ``value`` with datetimes rendered as ISO strings."""

    data = copy.deepcopy(value)
    if isinstance(data, Mapping) and not isinstance(data, dict):
        data = dict(data)
    return _normalize_datetime_values(data)


def _normalize_datetime_values(data: Any) -> Any:
    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, dict):
        for key, item in data.items():
            data[key] = _normalize_datetime_values(item)
    elif isinstance(data, list):
        for index, item in enumerate(data):
            data[index] = _normalize_datetime_values(item)
    return data


__all__ = [
    "ActorSummary",
    "PresenceStatus",
    "RealtimeEvent",
    "Authenticated",
    "AuthError",
    "JoinedRoom",
    "LeftRoom",
    "TaskUpdated",
    "TaskAssigned",
    "TaskDeleted",
    "TaskCommentAdded",
    "UserPresence",
    "UserTyping",
    "UserStoppedTyping",
    "NotificationPushed",
    "DirectMessage",
    "to_jsonable",
]
