"""Services package."""

from services.validation import (
    ValidationResult,
    is_valid_email,
    validate_employee,
    validate_task,
)

__all__ = [
    "ValidationResult",
    "is_valid_email",
    "validate_employee",
    "validate_task",
]
