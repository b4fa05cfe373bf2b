"""Shared plumbing for the repositories."""

from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

import pytz
from sqlalchemy import Select, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from core.exceptions import PersistenceError, ReferentialError

T = TypeVar("T")


def current_time() -> datetime:
    """Timezone-aware "now" in the configured timezone."""
    return datetime.now(pytz.timezone(settings.timezone))


class BaseRepository:
    """Base data access class holding the session and the clock."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = current_time):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy database session.
            clock: Returns the timestamp used by lifecycle hooks.
        """
        self.db = db
        self.clock = clock

    def flush(self) -> None:
        """Flush pending changes, wrapping store failures in PersistenceError."""
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database write failed: {e}") from e

    def get(self, model: type[T], entity_id: int) -> T | None:
        """Load a record by primary key, wrapping store failures in PersistenceError."""
        try:
            return self.db.get(model, entity_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database read failed: {e}") from e

    def fetch_all(self, query: Select) -> list:
        """Run a select and return every row, wrapping store failures."""
        try:
            return list(self.db.scalars(query))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database read failed: {e}") from e

    def resolve_reference(self, model: type[T], entity_id: int | None) -> T | None:
        """Load the record a foreign key points at.

        Raises:
            ReferentialError: if an id is given and no such record exists.
        """
        if entity_id is None:
            return None
        record = self.get(model, entity_id)
        if record is None:
            raise ReferentialError(model.__name__, entity_id)
        return record

    @staticmethod
    def candidate(record: T, changes: dict[str, Any]) -> T:
        """Build a detached copy of record with changes applied.

        Used to validate an update before touching the session-bound record.
        """
        mapper = inspect(type(record))
        values = {attr.key: getattr(record, attr.key) for attr in mapper.column_attrs}
        values.update(changes)
        return type(record)(**values)
