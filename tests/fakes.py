# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytz


class FakeClock:
    """
    Deterministic clock for the repositories.

    Returns the same instant until advanced, so tests can assert exact
    timestamp values written by the task lifecycle hooks.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 5, 9, 0, tzinfo=pytz.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now
