"""Connection-facing handlers for the inbound side of the wire contract."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from tasket.application.ports import IdentityResolver
from tasket.domain.entities import AuthError, Authenticated, JoinedRoom, LeftRoom, UserSummary
from tasket.domain.errors import AuthenticationError

from .connection import Connection
from .fanout import EventFanout
from .presence import PresenceTracker
from .registry import ConnectionRegistry, department_room, user_room
from .router import BroadcastRouter

logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008


class RealtimeGateway:
    """Drive the per-connection state machine.

    ``connect`` registers an unauthenticated connection, ``authenticate``
    binds it to a user, ``disconnect`` is terminal. Every other inbound event
    is ignored until the connection is authenticated.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        router: BroadcastRouter,
        presence: PresenceTracker,
        fanout: EventFanout,
        identity: IdentityResolver,
    ) -> None:
        self._registry = registry
        self._router = router
        self._presence = presence
        self._fanout = fanout
        self._identity = identity
        self._handlers: dict[str, Callable[[Connection, Any], Awaitable[Any]]] = {
            "authenticate": self.authenticate,
            "join_room": self._on_join_room,
            "leave_room": self._on_leave_room,
            "task_update": self.relay_task_update,
            "task_comment": self.relay_task_comment,
            "typing_start": self.typing_start,
            "typing_stop": self.typing_stop,
            "user_online": self.announce_online,
        }

    def connect(self, connection: Connection) -> None:
        self._registry.add(connection)
        logger.info("Client connected: %s", connection.id)

    async def dispatch(self, connection: Connection, frame: Any) -> None:
        """Route one inbound ``{"type", "data"}`` frame. Unknown frames are dropped."""

        if not isinstance(frame, Mapping):
            logger.debug("Ignoring non-object frame from %s", connection.id)
            return
        handler = self._handlers.get(frame.get("type"))
        if handler is None:
            logger.debug("Ignoring unknown frame %r from %s", frame.get("type"), connection.id)
            return
        await handler(connection, frame.get("data"))

    async def authenticate(self, connection: Connection, token: Any) -> UserSummary | None:
        """Bind ``connection`` to the user behind ``token``.

        On failure the client receives ``auth_error``, the connection is closed
        and :class:`AuthenticationError` is raised. Returns ``None`` when the
        connection went away while the user was being loaded.
        """

        if isinstance(token, Mapping):
            token = token.get("token")
        try:
            user_id = self._identity.verify(token)
            user = await self._identity.load_user_summary(user_id)
            if user is None:
                raise AuthenticationError("User not found")
        except AuthenticationError as exc:
            logger.warning("Socket authentication failed for %s: %s", connection.id, exc.reason)
            await self._router.send(connection, AuthError())
            await self.disconnect(connection.id)
            await connection.close(code=POLICY_VIOLATION)
            raise

        if self._registry.get(connection.id) is None:
            logger.info("Connection %s closed before authentication completed", connection.id)
            return None

        previous = self._registry.identity(connection.id)
        if previous is not None and previous.id != user.id:
            self._release_identity(connection.id, previous)
        else:
            previous = None

        self._registry.bind(connection.id, user)
        if user.department_id:
            self._registry.join(connection.id, department_room(user.department_id))
        self._registry.join(connection.id, user_room(user.id))

        await self._router.send(connection, Authenticated(user=user))
        if previous is not None:
            await self._presence.offline(previous)
        await self._presence.online(user)
        logger.info("User authenticated: %s (%s)", user.name, user.email)
        return user

    async def join_room(self, connection: Connection, room: str) -> bool:
        user = self._registry.identity(connection.id)
        if user is None or not room:
            return False
        self._registry.join(connection.id, room)
        logger.debug("User %s joined room: %s", user.name, room)
        await self._router.send(connection, JoinedRoom(room=room))
        return True

    async def leave_room(self, connection: Connection, room: str) -> bool:
        user = self._registry.identity(connection.id)
        if user is None or not room:
            return False
        self._registry.leave(connection.id, room)
        logger.debug("User %s left room: %s", user.name, room)
        await self._router.send(connection, LeftRoom(room=room))
        return True

    async def relay_task_update(self, connection: Connection, task: Any) -> None:
        user = self._registry.identity(connection.id)
        if user is not None and isinstance(task, Mapping):
            await self._fanout.task_updated(task, user)

    async def relay_task_comment(self, connection: Connection, comment: Any) -> None:
        user = self._registry.identity(connection.id)
        if user is not None and isinstance(comment, Mapping):
            await self._fanout.comment_added(comment, user)

    async def typing_start(self, connection: Connection, data: Any) -> None:
        user = self._registry.identity(connection.id)
        task_id = _task_id_from(data)
        if user is not None and task_id:
            await self._fanout.typing_started(connection.id, user, task_id)

    async def typing_stop(self, connection: Connection, data: Any) -> None:
        user = self._registry.identity(connection.id)
        task_id = _task_id_from(data)
        if user is not None and task_id:
            await self._fanout.typing_stopped(connection.id, user, task_id)

    async def announce_online(self, connection: Connection, _data: Any = None) -> None:
        user = self._registry.identity(connection.id)
        if user is not None:
            await self._presence.online(user)

    async def disconnect(self, connection_id: str) -> None:
        """Tear down all state for the connection. Safe to call repeatedly."""

        # Removal happens before any await so a second call finds nothing.
        user = self._registry.remove(connection_id)
        if user is None:
            logger.info("Client disconnected: %s", connection_id)
            return
        logger.info("User disconnected: %s (%s)", user.name, connection_id)
        await self._presence.offline(user)

    def _release_identity(self, connection_id: str, previous: UserSummary) -> None:
        """Drop the private rooms of the user this connection used to speak for."""

        self._registry.leave(connection_id, user_room(previous.id))
        if previous.department_id:
            self._registry.leave(connection_id, department_room(previous.department_id))
        logger.info("Connection %s switched away from user %s", connection_id, previous.name)

    async def _on_join_room(self, connection: Connection, data: Any) -> None:
        await self.join_room(connection, _room_from(data))

    async def _on_leave_room(self, connection: Connection, data: Any) -> None:
        await self.leave_room(connection, _room_from(data))


def _room_from(data: Any) -> str:
    if isinstance(data, Mapping):
        data = data.get("room")
    return data if isinstance(data, str) else ""


def _task_id_from(data: Any) -> Any:
    if isinstance(data, Mapping):
        return data.get("taskId") or data.get("task_id")
    return None


__all__ = ["RealtimeGateway", "POLICY_VIOLATION"]
