"""Account endpoints: registration, login and the caller's own profile."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.auth.auth import create_access_token, hash_password, token_required, verify_password
from config.database import get_db, transaction
from core.exceptions import EmployeeManagementError
from models.user import UserRole
from repositories.user_repository import UserRepository
from schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Username or email already in use"},
    401: {"description": "Invalid credentials or token"},
}


@router.get(
    "/status",
    response_model=AuthStatusResponse,
    summary="Auth API status",
)
def auth_status() -> AuthStatusResponse:
    return AuthStatusResponse(status="Auth API is running")


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an account",
    responses={**ERROR_RESPONSES, 403: {"description": "Role requires an admin token"}},
)
def register(
    payload: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenResponse:
    """Create an account and return a token for it.

    New accounts get the employee role. Requesting another role needs an
    admin's bearer token, except when no account exists yet.
    """
    repo = UserRepository(db)
    role = payload.role or UserRole.EMPLOYEE
    password_hash = hash_password(payload.password)

    try:
        with transaction(db):
            if repo.find_existing(payload.username, payload.email) is not None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="User already exists",
                )
            if role != UserRole.EMPLOYEE and repo.has_users():
                caller = token_required(authorization, db)
                if caller["role"] != UserRole.ADMIN:
                    raise HTTPException(
                        status_code=status.HTTP_403_FORBIDDEN,
                        detail="Only an admin may register accounts with this role",
                    )
            user = repo.create_user(
                payload.username,
                payload.email,
                role=role,
                password_hash=password_hash,
            )
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error during registration")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e

    return TokenResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Sign in",
    responses=ERROR_RESPONSES,
)
def login(
    payload: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    user = UserRepository(db).get_user_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    logger.info("User logged in: id=%s", user.id)
    return TokenResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    responses=ERROR_RESPONSES,
)
def me(
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    return UserResponse.model_validate(UserRepository(db).get_user(auth_payload["user_id"]))


@router.put(
    "/profile",
    response_model=ProfileResponse,
    summary="Update the current user's profile",
    responses=ERROR_RESPONSES,
)
def update_profile(
    payload: ProfileUpdate,
    auth_payload: Annotated[dict, Depends(token_required)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    """Change username, email or password.

    A new password is only accepted together with the current one.
    """
    repo = UserRepository(db)
    changes = payload.model_dump(
        exclude_unset=True,
        exclude={"current_password", "new_password"},
    )

    try:
        with transaction(db):
            user = repo.get_user(auth_payload["user_id"])

            if "email" in changes and changes["email"].lower() != user.email.lower():
                if repo.get_user_by_email(changes["email"]) is not None:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail="Email already in use",
                    )
            if "username" in changes and changes["username"] != user.username:
                if repo.get_user_by_username(changes["username"]) is not None:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail="Username already in use",
                    )

            if payload.new_password:
                if not verify_password(payload.current_password or "", user.password_hash):
                    raise HTTPException(
                        status_code=status.HTTP_401_UNAUTHORIZED,
                        detail="Current password is incorrect",
                    )
                changes["password_hash"] = hash_password(payload.new_password)

            repo.update_user(user, changes)
    except (HTTPException, EmployeeManagementError):
        raise
    except Exception as e:
        logger.exception("Unexpected error updating profile")
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}",
        ) from e

    return ProfileResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user),
    )
