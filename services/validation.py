"""Record validation run by the repositories before every write."""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field

from core.exceptions import FieldError, ValidationError
from models.employee import Employee
from models.task import Task, TaskStatus

EMPLOYEE_REQUIRED_FIELDS = ("first_name", "last_name", "email")
TASK_REQUIRED_FIELDS = ("title",)
TASK_STATUS_VALUES = frozenset(status.value for status in TaskStatus)


class ValidationResult(BaseModel):
    """Outcome of validating one record."""

    entity: str = Field(description="Name of the validated entity")
    errors: list[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, field: str, message: str) -> None:
        self.errors.append(FieldError(field=field, message=message))

    def raise_for_errors(self) -> None:
        """Raise ValidationError listing every failing field, if any."""
        if self.errors:
            raise ValidationError(self.entity, self.errors)


def is_blank(value) -> bool:
    """True for None and for strings that are empty after stripping."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _check_required(record, fields: tuple[str, ...], result: ValidationResult) -> None:
    for field in fields:
        if is_blank(getattr(record, field)):
            result.add(field, "must not be blank")


def is_valid_email(value: str) -> bool:
    """Check email syntax only; no DNS or deliverability lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_employee(employee: Employee) -> ValidationResult:
    """Validate an employee: names and email present, email well formed.

    Args:
        employee: The employee record to check.

    Returns:
        ValidationResult with one FieldError per failing field.
    """
    result = ValidationResult(entity="Employee")
    _check_required(employee, EMPLOYEE_REQUIRED_FIELDS, result)

    if not is_blank(employee.email) and not is_valid_email(employee.email):
        result.add("email", "must be a well-formed email address")

    return result


def is_valid_status(value) -> bool:
    """True for None (defaulted on insert) and for any TaskStatus name."""
    if value is None:
        return True
    return isinstance(value, str) and value in TASK_STATUS_VALUES


def validate_task(task: Task) -> ValidationResult:
    """Validate a task: title present and not blank, status a known state."""
    result = ValidationResult(entity="Task")
    _check_required(task, TASK_REQUIRED_FIELDS, result)

    if not is_valid_status(task.status):
        result.add("status", f"must be one of {', '.join(sorted(TASK_STATUS_VALUES))}")

    return result
