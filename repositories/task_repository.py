"""Repository for task database operations."""

import logging
from typing import Any

from sqlalchemy import select

from core.exceptions import NotFoundError
from models.employee import Employee
from models.task import Task, TaskStatus
from models.user import User
from repositories.base import BaseRepository
from services.validation import validate_task

logger = logging.getLogger(__name__)


class TaskRepository(BaseRepository):
    """Data access layer for tasks.

    Every write goes through validate_task() and then exactly one lifecycle
    hook on the task: before_insert() on create, before_update() on update.
    """

    def get_task(self, task_id: int) -> Task | None:
        """Get a task by id, or None."""
        return self.get(Task, task_id)

    def require_task(self, task_id: int) -> Task:
        """Get a task by id or raise NotFoundError."""
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def list_tasks(
        self,
        employee_id: int | None = None,
        status: TaskStatus | None = None,
        priority: int | None = None,
    ) -> list[Task]:
        """List tasks, optionally filtered, soonest due date first.

        Tasks without a due date sort last.
        """
        query = select(Task)
        if employee_id is not None:
            query = query.where(Task.assigned_to_id == employee_id)
        if status is not None:
            query = query.where(Task.status == status)
        if priority is not None:
            query = query.where(Task.priority == priority)

        query = query.order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.id.asc())
        return self.fetch_all(query)

    def create_task(self, data: dict[str, Any], created_by_id: int | None = None) -> Task:
        """Validate and insert a new task.

        Args:
            data: Column values; assigned_to_id, when present, must reference
                an employee.
            created_by_id: ID of the user creating the task.

        Returns:
            The created Task with id, timestamps and status filled in.

        Raises:
            ValidationError: title blank or missing, or status unknown.
            ReferentialError: assignee or creator does not exist.
            PersistenceError: the store rejected the write.
        """
        values = dict(data)
        assignee = self.resolve_reference(Employee, values.pop("assigned_to_id", None))
        creator = self.resolve_reference(User, created_by_id)

        task = Task(**values)
        validate_task(task).raise_for_errors()
        if task.status is not None:
            task.status = TaskStatus(task.status)

        task.assigned_to = assignee
        task.created_by = creator
        task.before_insert(self.clock())

        self.db.add(task)
        self.flush()
        logger.info(
            "Created task: id=%s status=%s assigned_to=%s",
            task.id,
            task.status.value,
            task.assigned_to_id,
        )
        return task

    def update_task(self, task: Task, changes: dict[str, Any]) -> Task:
        """Apply changes to a task and refresh its updated_at.

        Nothing is applied when validation or a reference check fails.
        """
        validate_task(self.candidate(task, changes)).raise_for_errors()

        values = dict(changes)
        references = {}
        if "assigned_to_id" in values:
            references["assigned_to"] = self.resolve_reference(
                Employee, values.pop("assigned_to_id")
            )
        if "created_by_id" in values:
            references["created_by"] = self.resolve_reference(User, values.pop("created_by_id"))
        if values.get("status") is not None:
            values["status"] = TaskStatus(values["status"])
        values.pop("created_at", None)

        for field, value in {**values, **references}.items():
            setattr(task, field, value)

        task.before_update(self.clock())
        self.flush()
        logger.info("Updated task: id=%s fields=%s", task.id, sorted(changes))
        return task

    def delete_task(self, task: Task) -> None:
        """Delete a single task. The assignee and creator are untouched."""
        self.db.delete(task)
        self.flush()
        logger.info("Deleted task: id=%s", task.id)
