"""Models package."""

from models.base import Base, TimestampedModel
from models.employee import Employee
from models.task import Task, TaskStatus
from models.user import User, UserRole

__all__ = [
    "Base",
    "TimestampedModel",
    "Employee",
    "Task",
    "TaskStatus",
    "User",
    "UserRole",
]
