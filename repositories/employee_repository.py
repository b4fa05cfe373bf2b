"""Repository for employee database operations."""

import logging
from typing import Any

from sqlalchemy import select

from core.exceptions import NotFoundError
from models.employee import Employee
from models.task import Task
from models.user import User
from repositories.base import BaseRepository
from services.validation import validate_employee

logger = logging.getLogger(__name__)


class EmployeeRepository(BaseRepository):
    """Data access layer for employees and the tasks they own."""

    def get_employee(self, employee_id: int) -> Employee | None:
        """Get an employee by id.

        Args:
            employee_id: The employee's ID.

        Returns:
            Employee record if exists, None otherwise.
        """
        return self.get(Employee, employee_id)

    def require_employee(self, employee_id: int) -> Employee:
        """Get an employee by id or raise NotFoundError."""
        employee = self.get_employee(employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        return employee

    def list_employees(self) -> list[Employee]:
        """All employees, most recently created first."""
        return self.fetch_all(select(Employee).order_by(Employee.id.desc()))

    def create_employee(self, data: dict[str, Any]) -> Employee:
        """Validate and insert a new employee.

        Args:
            data: Column values; user_id, when present, must reference a user.

        Returns:
            The created Employee record with its id assigned.

        Raises:
            ValidationError: required field blank or malformed email.
            ReferentialError: user_id does not exist.
            PersistenceError: the store rejected the write.
        """
        values = dict(data)
        user = self.resolve_reference(User, values.pop("user_id", None))

        employee = Employee(**values)
        validate_employee(employee).raise_for_errors()
        employee.user = user

        self.db.add(employee)
        self.flush()
        logger.info("Created employee: id=%s", employee.id)
        return employee

    def update_employee(self, employee: Employee, changes: dict[str, Any]) -> Employee:
        """Apply changes to an employee after validating the result.

        Nothing is applied when validation or the reference check fails.
        """
        validate_employee(self.candidate(employee, changes)).raise_for_errors()

        values = dict(changes)
        if "user_id" in values:
            employee.user = self.resolve_reference(User, values.pop("user_id"))
        for field, value in values.items():
            setattr(employee, field, value)

        self.flush()
        logger.info("Updated employee: id=%s fields=%s", employee.id, sorted(changes))
        return employee

    def get_tasks(self, employee: Employee) -> list[Task]:
        """Tasks currently assigned to the employee, read from the store."""
        return self.fetch_all(
            select(Task).where(Task.assigned_to_id == employee.id).order_by(Task.id)
        )

    def delete_employee(self, employee: Employee) -> int:
        """Delete an employee together with every task it owns.

        The tasks and the employee are removed in one flush, so a failure
        leaves the session to be rolled back as a unit. The linked user is
        only detached.

        Returns:
            Number of tasks deleted along with the employee.
        """
        tasks = self.get_tasks(employee)
        for task in tasks:
            self.db.delete(task)
        employee.user = None
        self.db.delete(employee)
        self.flush()
        logger.info("Deleted employee: id=%s with %d task(s)", employee.id, len(tasks))
        return len(tasks)

    def remove_task(self, employee: Employee, task: Task) -> None:
        """Remove a task from the employee's collection, deleting the task.

        Raises:
            NotFoundError: the task is not assigned to this employee.
        """
        if task.assigned_to_id != employee.id:
            raise NotFoundError("Task", task.id)

        if task in employee.tasks:
            employee.tasks.remove(task)
        self.db.delete(task)
        self.flush()
        logger.info("Removed task: id=%s from employee_id=%s", task.id, employee.id)
