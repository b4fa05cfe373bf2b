"""User account model.

Accounts sign in with email and password. password_hash holds a bcrypt hash;
accounts provisioned without one cannot log in.
"""

import enum

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from models.base import Base


class UserRole(str, enum.Enum):
    """Roles recognised by the API authorization checks."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class User(Base):
    """User model mapping to the users table."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )

    employee = relationship("Employee", back_populates="user", uselist=False)
