"""Employee API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth.auth import require_roles, token_required
from config.database import get_db, transaction
from core.exceptions import EmployeeManagementError
from models.user import UserRole
from repositories.employee_repository import EmployeeRepository
from repositories.task_repository import TaskRepository
from schemas.common import ErrorResponse, MessageResponse
from schemas.employee import (
    EmployeeCreate,
    EmployeeDeleteResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from schemas.task import TaskResponse

logger = logging.getLogger(__name__)

router = APIRouter()

manager_required = require_roles(UserRole.ADMIN, UserRole.MANAGER)

ERROR_RESPONSES = {
    401: {"description": "Authentication failed"},
    404: {"model": ErrorResponse, "description": "Employee not found"},
    422: {"model": ErrorResponse, "description": "Validation or reference error"},
}


@router.get(
    "/",
    response_model=list[EmployeeResponse],
    summary="List employees",
)
def list_employees(
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> list[EmployeeResponse]:
    """Return all employees, newest first."""
    return EmployeeRepository(db).list_employees()


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get an employee",
    responses=ERROR_RESPONSES,
)
def get_employee(
    employee_id: int,
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeResponse:
    return EmployeeRepository(db).require_employee(employee_id)


@router.post(
    "/",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an employee",
    responses=ERROR_RESPONSES,
)
def create_employee(
    payload: EmployeeCreate,
    auth_payload: Annotated[dict, Depends(manager_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeResponse:
    """Create an employee.

    first_name, last_name and email must be non-blank and the email well
    formed; every failing field is listed in the 422 response.
    """
    try:
        with transaction(db):
            employee = EmployeeRepository(db).create_employee(payload.model_dump())
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error creating employee")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    logger.info("Employee created by user_id=%s: id=%s", auth_payload["user_id"], employee.id)
    return employee


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update an employee",
    responses=ERROR_RESPONSES,
)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    auth_payload: Annotated[dict, Depends(manager_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeResponse:
    """Apply the fields present in the body to an employee."""
    repo = EmployeeRepository(db)
    try:
        with transaction(db):
            employee = repo.require_employee(employee_id)
            repo.update_employee(employee, payload.model_dump(exclude_unset=True))
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error updating employee")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    return employee


@router.delete(
    "/{employee_id}",
    response_model=EmployeeDeleteResponse,
    summary="Delete an employee and its tasks",
    responses=ERROR_RESPONSES,
)
def delete_employee(
    employee_id: int,
    auth_payload: Annotated[dict, Depends(manager_required)],
    db: Annotated[Session, Depends(get_db)],
) -> EmployeeDeleteResponse:
    """Delete an employee. All tasks assigned to it are deleted in the same transaction."""
    repo = EmployeeRepository(db)
    try:
        with transaction(db):
            employee = repo.require_employee(employee_id)
            deleted_tasks = repo.delete_employee(employee)
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error deleting employee")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    return EmployeeDeleteResponse(id=employee_id, deleted_tasks=deleted_tasks)


@router.get(
    "/{employee_id}/tasks",
    response_model=list[TaskResponse],
    summary="List an employee's tasks",
    responses=ERROR_RESPONSES,
)
def list_employee_tasks(
    employee_id: int,
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> list[TaskResponse]:
    repo = EmployeeRepository(db)
    return repo.get_tasks(repo.require_employee(employee_id))


@router.delete(
    "/{employee_id}/tasks/{task_id}",
    response_model=MessageResponse,
    summary="Remove a task from an employee",
    responses=ERROR_RESPONSES,
)
def remove_employee_task(
    employee_id: int,
    task_id: int,
    auth_payload: Annotated[dict, Depends(manager_required)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Remove a task from the employee's collection. The task is deleted, not unassigned."""
    repo = EmployeeRepository(db)
    try:
        with transaction(db):
            employee = repo.require_employee(employee_id)
            task = TaskRepository(db).require_task(task_id)
            repo.remove_task(employee, task)
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error removing task from employee")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    return MessageResponse(message="Task removed")
