"""Repository for user account operations."""

import logging
from typing import Any

from sqlalchemy import func, or_, select

from models.user import User, UserRole
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    """Data access layer for user accounts."""

    def get_user(self, user_id: int) -> User | None:
        return self.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        """Look up a user by email address (case-insensitive)."""
        users = self.fetch_all(select(User).where(func.lower(User.email) == email.lower()))
        return users[0] if users else None

    def get_user_by_username(self, username: str) -> User | None:
        users = self.fetch_all(select(User).where(User.username == username))
        return users[0] if users else None

    def find_existing(self, username: str, email: str) -> User | None:
        """Return a user already holding the username or the email, if any."""
        users = self.fetch_all(
            select(User).where(
                or_(User.username == username, func.lower(User.email) == email.lower())
            )
        )
        return users[0] if users else None

    def has_users(self) -> bool:
        return bool(self.fetch_all(select(User.id).limit(1)))

    def create_user(
        self,
        username: str,
        email: str,
        role: UserRole = UserRole.EMPLOYEE,
        password_hash: str | None = None,
    ) -> User:
        user = User(username=username, email=email, role=role, password_hash=password_hash)
        self.db.add(user)
        self.flush()
        logger.info("Created user: id=%s role=%s", user.id, user.role.value)
        return user

    def update_user(self, user: User, changes: dict[str, Any]) -> User:
        """Apply profile changes (username, email, password_hash) to a user."""
        for field, value in changes.items():
            setattr(user, field, value)
        self.flush()
        logger.info(
            "Updated user: id=%s fields=%s",
            user.id,
            sorted(field for field in changes if field != "password_hash"),
        )
        return user
