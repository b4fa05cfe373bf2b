"""Schemas package."""

from schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from schemas.common import ErrorResponse, MessageResponse
from schemas.employee import (
    EmployeeCreate,
    EmployeeDeleteResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "AuthStatusResponse",
    "LoginRequest",
    "ProfileResponse",
    "ProfileUpdate",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "ErrorResponse",
    "MessageResponse",
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",
    "EmployeeDeleteResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
