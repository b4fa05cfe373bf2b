"""Authentication module."""

from app.auth.auth import (
    create_access_token,
    hash_password,
    require_roles,
    token_required,
    validate_token,
    verify_password,
)

__all__ = [
    "create_access_token",
    "hash_password",
    "require_roles",
    "token_required",
    "validate_token",
    "verify_password",
]
