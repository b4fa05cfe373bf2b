"""API v1 router aggregation."""

from fastapi import APIRouter

from routers.v1.auth import router as auth_router
from routers.v1.employees import router as employees_router
from routers.v1.tasks import router as tasks_router

# Create v1 API router
router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(
    auth_router,
    prefix="/auth",
    tags=["Auth"],
)
router.include_router(
    employees_router,
    prefix="/employees",
    tags=["Employees"],
)
router.include_router(
    tasks_router,
    prefix="/tasks",
    tags=["Tasks"],
)
