"""Error taxonomy raised by the repositories and validation layer."""

from typing import Any

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """A single failing field and the reason it failed."""

    field: str = Field(description="Name of the failing attribute")
    message: str = Field(description="Why the value was rejected")


class EmployeeManagementError(Exception):
    """Base class for all application errors."""


class ValidationError(EmployeeManagementError):
    """A record failed validation and was not written.

    Attributes:
        entity: Name of the entity being validated.
        errors: Every field-level failure found.
    """

    def __init__(self, entity: str, errors: list[FieldError]):
        self.entity = entity
        self.errors = list(errors)
        super().__init__(f"Invalid {entity}: {', '.join(self.fields)}")

    @property
    def fields(self) -> list[str]:
        """Names of the failing fields, in the order they were checked."""
        return [error.field for error in self.errors]


class ReferentialError(EmployeeManagementError):
    """A create or update referenced a record that does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id={entity_id} does not exist")


class NotFoundError(EmployeeManagementError):
    """A lookup by id found no record."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: id={entity_id}")


class PersistenceError(EmployeeManagementError):
    """The underlying store failed; the original error is chained as __cause__."""
