"""JWT bearer token authentication.

Tokens are HS256-signed with ``settings.jwt_secret`` and carry the user id in
``sub`` and the user's role in ``role``. The token_required dependency should
be used on all protected endpoints; require_roles narrows it to given roles.
Passwords are stored as bcrypt hashes.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Annotated

import bcrypt
import jwt
import pytz
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import settings
from models.user import User, UserRole
from repositories.user_repository import UserRepository


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored bcrypt hash. No hash never matches."""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_access_token(user: User, expires_minutes: int | None = None) -> str:
    """Issue a signed access token for a user.

    Args:
        user: The user the token authenticates.
        expires_minutes: Lifetime override; defaults to the configured value.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(pytz.utc)
    lifetime = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    payload = {
        "sub": str(user.id),
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def validate_token(token: str, db: Session) -> dict:
    """Validate a JWT token and load the user it names.

    Args:
        token: The JWT token string to validate.
        db: Database session for user lookup.

    Returns:
        dict containing user_id, email, role, and decoded token.

    Raises:
        HTTPException: For various authentication failures.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication Token is missing!",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        decoded_token = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise HTTPException(status_code=401, detail="Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Token validation failed: {str(e)}") from e

    try:
        user_id = int(decoded_token["sub"])
    except ValueError as e:
        raise HTTPException(status_code=401, detail="Invalid Token: malformed subject") from e

    current_user = UserRepository(db).get_user(user_id)
    if current_user is None:
        raise HTTPException(status_code=401, detail="Invalid Token")

    return {
        "user_id": current_user.id,
        "email": current_user.email,
        "role": current_user.role,
        "token": decoded_token,
    }


def token_required(
    authorization: Annotated[str | None, Header()] = None,
    db: Annotated[Session, Depends(get_db)] = None,
) -> dict:
    """FastAPI dependency for requiring valid authentication.

    Args:
        authorization: The Authorization header value.
        db: Database session (injected).

    Returns:
        dict containing user_id, email, role, and decoded token.

    Raises:
        HTTPException: If authentication fails.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing or malformed",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1].strip()
    return validate_token(token, db)


def require_roles(*roles: UserRole) -> Callable[..., dict]:
    """Build a dependency that only admits users holding one of the roles."""

    def dependency(auth_payload: Annotated[dict, Depends(token_required)]) -> dict:
        if auth_payload["role"] not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied: insufficient permissions",
            )
        return auth_payload

    return dependency
