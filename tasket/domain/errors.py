"""Exceptions raised by the realtime and reminder subsystems."""

from __future__ import annotations


class TasketError(Exception):
    """Base class for errors raised by this package."""


class AuthenticationError(TasketError):
    """Raised when a bearer token cannot be resolved to an active user."""

    def __init__(self, reason: str = "Authentication failed") -> None:
        super().__init__(reason)
        self.reason = reason


class SweepError(TasketError):
    """Raised when a due-date sweep cannot complete."""

    def __init__(self, notification_type: str, cause: BaseException) -> None:
        super().__init__(f"Sweep '{notification_type}' aborted: {cause}")
        self.notification_type = notification_type
        self.cause = cause


__all__ = ["TasketError", "AuthenticationError", "SweepError"]
