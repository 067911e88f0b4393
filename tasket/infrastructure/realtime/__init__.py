"""Realtime collaboration helpers for the infrastructure layer."""

from .connection import Connection, WebSocketConnection
from .fanout import EventFanout, as_actor
from .gateway import POLICY_VIOLATION, RealtimeGateway
from .hub import RealtimeHub
from .presence import PresenceTracker
from .publisher import RealtimePublisher
from .registry import ConnectionRegistry, department_room, task_room, user_room
from .router import BROADCAST_ALL, BroadcastRouter

__all__ = [
    "Connection",
    "WebSocketConnection",
    "EventFanout",
    "as_actor",
    "POLICY_VIOLATION",
    "RealtimeGateway",
    "RealtimeHub",
    "PresenceTracker",
    "RealtimePublisher",
    "ConnectionRegistry",
    "department_room",
    "task_room",
    "user_room",
    "BROADCAST_ALL",
    "BroadcastRouter",
]
