"""Repository implementations for infrastructure layer."""

from .employee_repository import EmployeeRepository
from .task_repository import TaskRepository
from .notification_repository import NotificationRepository

__all__ = [
    "EmployeeRepository",
    "TaskRepository",
    "NotificationRepository",
]
