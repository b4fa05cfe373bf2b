"""Pydantic schemas for employee API requests and responses."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class EmployeeBase(BaseModel):
    """Optional employee attributes shared by create and response shapes."""

    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    address: str | None = None
    hire_date: date | None = None
    salary: Decimal | None = Field(default=None, max_digits=12, decimal_places=2)
    user_id: int | None = Field(
        default=None,
        description="ID of the linked user account",
    )


class EmployeeCreate(EmployeeBase):
    """Request body for creating an employee.

    Blank names and malformed emails are rejected by the repository with a
    field-level error list.
    """

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    email: str = Field(max_length=255)


class EmployeeUpdate(BaseModel):
    """Request body for a partial employee update. Only sent fields change."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    address: str | None = None
    hire_date: date | None = None
    salary: Decimal | None = Field(default=None, max_digits=12, decimal_places=2)
    user_id: int | None = None


class EmployeeResponse(EmployeeBase):
    """Employee as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str


class EmployeeDeleteResponse(BaseModel):
    """Result of deleting an employee."""

    id: int = Field(description="ID of the deleted employee")
    deleted_tasks: int = Field(description="Number of owned tasks deleted with it")
