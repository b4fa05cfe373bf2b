"""Pydantic schemas for account registration, login and profile endpoints."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

from models.user import UserRole

# bcrypt only considers the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def check_password_length(password: str) -> str:
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


Password = Annotated[str, AfterValidator(check_password_length)]


class RegisterRequest(BaseModel):
    """Request body for creating an account.

    role defaults to employee. Any other role needs an admin token, except
    for the very first account, which bootstraps the service.
    """

    username: str = Field(min_length=3, max_length=150)
    email: EmailStr
    password: Password = Field(min_length=6)
    role: UserRole | None = None


class LoginRequest(BaseModel):
    """Request body for signing in."""

    email: EmailStr
    password: Password


class ProfileUpdate(BaseModel):
    """Request body for updating the caller's own account.

    new_password is only applied together with the correct current_password.
    """

    username: str | None = Field(default=None, min_length=3, max_length=150)
    email: EmailStr | None = None
    current_password: Password | None = None
    new_password: Password | None = Field(default=None, min_length=6)

    @field_validator("username", "email")
    @classmethod
    def validate_not_null(cls, v):
        """Username and email can change but not be cleared."""
        if v is None:
            raise ValueError("field cannot be null")
        return v


class UserResponse(BaseModel):
    """Account as returned by the API. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: UserRole


class TokenResponse(BaseModel):
    """Access token issued on registration and login."""

    token: str = Field(description="Bearer token for the Authorization header")
    token_type: str = "bearer"
    user: UserResponse


class ProfileResponse(BaseModel):
    message: str
    user: UserResponse


class AuthStatusResponse(BaseModel):
    status: str
