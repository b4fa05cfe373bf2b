"""Repositories package."""

from repositories.base import BaseRepository, current_time
from repositories.employee_repository import EmployeeRepository
from repositories.task_repository import TaskRepository
from repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "current_time",
    "EmployeeRepository",
    "TaskRepository",
    "UserRepository",
]
