# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401  registers every table on Base.metadata
from app.auth.auth import create_access_token
from app.main import app
from config.database import enable_sqlite_foreign_keys, get_db
from models.base import Base
from models.user import User, UserRole
from repositories.employee_repository import EmployeeRepository
from repositories.task_repository import TaskRepository
from repositories.user_repository import UserRepository

from .fakes import FakeClock


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """
    In-memory SQLite shared by every connection of one test.

    Foreign keys are switched on so ON DELETE rules behave like production.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(engine: Engine) -> Iterator[Session]:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def employee_repo(db: Session) -> EmployeeRepository:
    return EmployeeRepository(db)


@pytest.fixture()
def task_repo(db: Session, clock: FakeClock) -> TaskRepository:
    return TaskRepository(db, clock=clock)


@pytest.fixture()
def user_repo(db: Session) -> UserRepository:
    return UserRepository(db)


@pytest.fixture()
def client(db: Session) -> Iterator[TestClient]:
    """TestClient whose requests all share the test's session."""

    def override_get_db() -> Iterator[Session]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def admin(user_repo: UserRepository, db: Session) -> User:
    user = user_repo.create_user("admin", "admin@example.com", role=UserRole.ADMIN)
    db.commit()
    return user


@pytest.fixture()
def manager(user_repo: UserRepository, db: Session) -> User:
    user = user_repo.create_user("manager", "manager@example.com", role=UserRole.MANAGER)
    db.commit()
    return user


@pytest.fixture()
def staff(user_repo: UserRepository, db: Session) -> User:
    user = user_repo.create_user("staff", "staff@example.com", role=UserRole.EMPLOYEE)
    db.commit()
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
