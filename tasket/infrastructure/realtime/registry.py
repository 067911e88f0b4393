"""Bookkeeping for live connections, identities and rooms."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import DefaultDict, Set

from tasket.domain.entities import UserSummary

from .connection import Connection

logger = logging.getLogger(__name__)


def user_room(user_id: int) -> str:
    return f"user_{user_id}"


def department_room(department_id: int) -> str:
    return f"department_{department_id}"


def task_room(task_id: object) -> str:
    return f"task_{task_id}"


class ConnectionRegistry:
    """Own the connection, identity-binding and room-membership tables.

    Only mutated from the event loop, so no locking is used. Direct addressing
    keeps one connection per user: the most recently authenticated one.
    """

    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}
        self._identities: dict[str, UserSummary] = {}
        self._user_connections: dict[int, str] = {}
        self._rooms: DefaultDict[str, Set[str]] = defaultdict(set)
        self._memberships: DefaultDict[str, Set[str]] = defaultdict(set)

    def add(self, connection: Connection) -> None:
        self._connections[connection.id] = connection

    def get(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def bind(self, connection_id: str, user: UserSummary) -> None:
        """Associate ``user`` with the connection, replacing any prior binding."""

        previous = self._identities.get(connection_id)
        if previous is not None and previous.id != user.id:
            self._forget_user_connection(previous.id, connection_id)
        self._identities[connection_id] = user
        self._user_connections[user.id] = connection_id

    def identity(self, connection_id: str) -> UserSummary | None:
        return self._identities.get(connection_id)

    def is_authenticated(self, connection_id: str) -> bool:
        return connection_id in self._identities

    def connection_for_user(self, user_id: int) -> Connection | None:
        connection_id = self._user_connections.get(user_id)
        if connection_id is None:
            return None
        return self._connections.get(connection_id)

    def join(self, connection_id: str, room: str) -> bool:
        if connection_id not in self._connections:
            return False
        self._rooms[room].add(connection_id)
        self._memberships[connection_id].add(room)
        return True

    def leave(self, connection_id: str, room: str) -> bool:
        members = self._rooms.get(room)
        if not members or connection_id not in members:
            return False
        members.discard(connection_id)
        if not members:
            self._rooms.pop(room, None)
        rooms = self._memberships.get(connection_id)
        if rooms is not None:
            rooms.discard(room)
        return True

    def rooms_of(self, connection_id: str) -> frozenset[str]:
        return frozenset(self._memberships.get(connection_id, ()))

    def members(self, room: str) -> list[Connection]:
        return [
            self._connections[connection_id]
            for connection_id in tuple(self._rooms.get(room, ()))
            if connection_id in self._connections
        ]

    def member_identities(self, room: str) -> list[UserSummary]:
        return [
            self._identities[connection_id]
            for connection_id in tuple(self._rooms.get(room, ()))
            if connection_id in self._identities
        ]

    def connections(self) -> list[Connection]:
        return list(self._connections.values())

    def authenticated_user_ids(self) -> set[int]:
        return {user.id for user in self._identities.values()}

    def remove(self, connection_id: str) -> UserSummary | None:
        """Drop every trace of the connection and return its former identity.

        Returns ``None`` when the connection was never authenticated or was
        already removed.
        """

        self._connections.pop(connection_id, None)
        for room in self._memberships.pop(connection_id, set()):
            members = self._rooms.get(room)
            if members is None:
                continue
            members.discard(connection_id)
            if not members:
                self._rooms.pop(room, None)

        user = self._identities.pop(connection_id, None)
        if user is not None:
            self._forget_user_connection(user.id, connection_id)
        return user

    def clear(self) -> None:
        self._connections.clear()
        self._identities.clear()
        self._user_connections.clear()
        self._rooms.clear()
        self._memberships.clear()

    def _forget_user_connection(self, user_id: int, connection_id: str) -> None:
        # A newer device may already own the direct-addressing slot.
        if self._user_connections.get(user_id) == connection_id:
            self._user_connections.pop(user_id, None)

    def __len__(self) -> int:
        return len(self._connections)


__all__ = [
    "ConnectionRegistry",
    "user_room",
    "department_room",
    "task_room",
]
