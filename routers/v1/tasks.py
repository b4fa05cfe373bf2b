"""Task API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.auth.auth import require_roles, token_required
from config.database import get_db, transaction
from core.exceptions import EmployeeManagementError
from models.task import TaskStatus
from models.user import UserRole
from repositories.task_repository import TaskRepository
from repositories.user_repository import UserRepository
from schemas.common import ErrorResponse, MessageResponse
from schemas.task import TaskCreate, TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

manager_required = require_roles(UserRole.ADMIN, UserRole.MANAGER)

ERROR_RESPONSES = {
    401: {"description": "Authentication failed"},
    403: {"description": "Not allowed for this user"},
    404: {"model": ErrorResponse, "description": "Task not found"},
    422: {"model": ErrorResponse, "description": "Validation or reference error"},
}

# Fields an assignee without a manager role may change on their own task
ASSIGNEE_EDITABLE_FIELDS = {"status"}


@router.get(
    "/",
    response_model=list[TaskResponse],
    summary="List tasks",
)
def list_tasks(
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
    employee_id: Annotated[int | None, Query(description="Only tasks assigned to this employee")] = None,
    task_status: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: Annotated[int | None, Query()] = None,
) -> list[TaskResponse]:
    """List tasks ordered by due date, soonest first, undated tasks last."""
    return TaskRepository(db).list_tasks(
        employee_id=employee_id,
        status=task_status,
        priority=priority,
    )


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task",
    responses=ERROR_RESPONSES,
)
def get_task(
    task_id: int,
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    return TaskRepository(db).require_task(task_id)


@router.post(
    "/",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses=ERROR_RESPONSES,
)
def create_task(
    payload: TaskCreate,
    auth_payload: Annotated[dict, Depends(manager_required)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    """Create a task on behalf of the authenticated user.

    status defaults to PENDING; created_at and updated_at are set by the server.
    """
    try:
        with transaction(db):
            task = TaskRepository(db).create_task(
                payload.model_dump(exclude_none=True),
                created_by_id=auth_payload["user_id"],
            )
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error creating task")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    return task


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
    responses=ERROR_RESPONSES,
)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> TaskResponse:
    """Update a task.

    Admins and managers may change any field. Any other user may only change
    the status of a task assigned to their own employee record; other fields
    in the body are ignored.
    """
    repo = TaskRepository(db)
    try:
        with transaction(db):
            task = repo.require_task(task_id)
            changes = payload.model_dump(exclude_unset=True)

            if auth_payload["role"] not in (UserRole.ADMIN, UserRole.MANAGER):
                user = UserRepository(db).get_user(auth_payload["user_id"])
                employee = user.employee if user is not None else None
                if employee is None or task.assigned_to_id != employee.id:
                    raise HTTPException(
                        status_code=status.HTTP_403_FORBIDDEN,
                        detail="Not authorized to update this task",
                    )
                changes = {k: v for k, v in changes.items() if k in ASSIGNEE_EDITABLE_FIELDS}

            repo.update_task(task, changes)
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error updating task")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    return task


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
    responses=ERROR_RESPONSES,
)
def delete_task(
    task_id: int,
    auth_payload: Annotated[dict, Depends(manager_required)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    repo = TaskRepository(db)
    try:
        with transaction(db):
            repo.delete_task(repo.require_task(task_id))
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error deleting task")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e
    logger.info("Task deleted by user_id=%s: id=%s", auth_payload["user_id"], task_id)
    return MessageResponse(message="Task deleted")
