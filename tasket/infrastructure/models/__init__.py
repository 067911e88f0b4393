"""ORM models used by the application infrastructure."""

from .department import DepartmentModel
from .employee import EmployeeModel
from .task import TaskModel
from .notification import NotificationModel

__all__ = [
    "DepartmentModel",
    "EmployeeModel",
    "TaskModel",
    "NotificationModel",
]
