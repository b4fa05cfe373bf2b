"""SQLAlchemy base class and mixins."""

from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class TimestampedModel:
    """Mixin for lifecycle timestamp columns.

    The values are written by the model's own lifecycle hooks, invoked by the
    repository right before insert and update, so there are no server defaults.
    """

    created_at: Mapped[datetime] = Column(
        DateTime(timezone=True),
        nullable=False,
    )

    updated_at: Mapped[datetime] = Column(
        DateTime(timezone=True),
        nullable=False,
    )
