# tests/test_task_lifecycle.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytz

from models.task import Task, TaskStatus

T0 = datetime(2026, 3, 1, 8, 30, tzinfo=pytz.utc)


def test_before_insert_defaults_status_and_stamps_both_timestamps() -> None:
    task = Task(title="Prepare onboarding")

    task.before_insert(T0)

    assert task.status is TaskStatus.PENDING
    assert task.created_at == T0
    assert task.updated_at == T0


def test_before_insert_keeps_explicit_status() -> None:
    task = Task(title="Review PR", status=TaskStatus.IN_PROGRESS)

    task.before_insert(T0)

    assert task.status is TaskStatus.IN_PROGRESS


def test_before_insert_overwrites_caller_timestamps() -> None:
    stale = T0 - timedelta(days=30)
    task = Task(title="Backfill", created_at=stale, updated_at=stale)

    task.before_insert(T0)

    assert task.created_at == T0
    assert task.updated_at == T0


def test_before_update_only_touches_updated_at() -> None:
    task = Task(title="Deploy")
    task.before_insert(T0)
    task.status = TaskStatus.COMPLETED

    later = T0 + timedelta(hours=2)
    task.before_update(later)

    assert task.created_at == T0
    assert task.updated_at == later
    assert task.status is TaskStatus.COMPLETED


def test_status_set_is_closed() -> None:
    assert [s.value for s in TaskStatus] == ["PENDING", "IN_PROGRESS", "COMPLETED"]
