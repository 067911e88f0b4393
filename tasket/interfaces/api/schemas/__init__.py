from .notification import (
    NotificationDeleteResponse,
    NotificationMarkAllReadResponse,
    NotificationMarkReadResponse,
    NotificationPage,
    NotificationRead,
)
from .realtime import OnlineUserRead, RealtimeStatsRead

__all__ = [
    "NotificationDeleteResponse",
    "NotificationMarkAllReadResponse",
    "NotificationMarkReadResponse",
    "NotificationPage",
    "NotificationRead",
    "OnlineUserRead",
    "RealtimeStatsRead",
]
