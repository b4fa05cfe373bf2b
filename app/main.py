"""FastAPI application entry point.

Employee Management Service - manages employees and the tasks assigned to
them, enforcing task lifecycle timestamps, default status, and cascading
deletion of an employee's tasks.
"""

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from core.exceptions import (
    NotFoundError,
    PersistenceError,
    ReferentialError,
    ValidationError,
)
from routers.v1 import router as v1_router
from schemas.common import ErrorResponse

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Employee Management Service",
    description="""
    Service for managing employees and their tasks.

    ## Features

    - Employee records with validated names and email
    - Tasks with automatic creation/update timestamps and a default PENDING status
    - Deleting an employee deletes all of its tasks

    ## Authentication

    Obtain a token from `POST /api/v1/auth/login` or `POST /api/v1/auth/register`.
    Employee and task endpoints require it as a Bearer token:
    ```
    Authorization: Bearer <token>
    ```
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(
        422,
        ErrorResponse(detail=str(exc), error_code="validation_error", errors=exc.errors),
    )


@app.exception_handler(ReferentialError)
async def referential_error_handler(request: Request, exc: ReferentialError) -> JSONResponse:
    return error_response(
        422,
        ErrorResponse(detail=str(exc), error_code="referential_error"),
    )


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(
        404,
        ErrorResponse(detail=f"{exc.entity} not found", error_code="not_found"),
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
    return error_response(
        500,
        ErrorResponse(detail="Database operation failed", error_code="persistence_error"),
    )


@app.get(
    "/health",
    tags=["Health"],
    summary="Health Check",
    description="Check if the service is running.",
)
async def health_check() -> dict:
    """Return service health status."""
    return {
        "status": "healthy",
        "service": "employee-management-service",
        "version": "1.0.0",
    }


# Include API routers
app.include_router(
    v1_router,
    prefix="/api",
)

logger.info("Employee Management Service initialized")
