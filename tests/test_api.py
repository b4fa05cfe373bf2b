# tests/test_api.py

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.auth.auth import create_access_token
from models.task import Task
from models.user import User
from repositories.employee_repository import EmployeeRepository

from .conftest import auth_headers

EMPLOYEES = "/api/v1/employees/"
TASKS = "/api/v1/tasks/"


def new_employee(client: TestClient, user: User, **overrides) -> dict:
    body = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}
    body.update(overrides)
    response = client.post(EMPLOYEES, json=body, headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


def new_task(client: TestClient, user: User, **overrides) -> dict:
    body = {"title": "Write report"}
    body.update(overrides)
    response = client.post(TASKS, json=body, headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_requests_without_token_are_rejected(client: TestClient) -> None:
    assert client.get(EMPLOYEES).status_code == 401
    assert client.get(TASKS, headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_expired_token_is_rejected(client: TestClient, admin: User) -> None:
    token = create_access_token(admin, expires_minutes=-1)

    response = client.get(EMPLOYEES, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_create_and_fetch_employee(client: TestClient, admin: User) -> None:
    created = new_employee(client, admin, email="a@b.com", salary="1200.50")

    response = client.get(f"{EMPLOYEES}{created['id']}", headers=auth_headers(admin))

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "a@b.com"
    assert body["first_name"] == "Ada"
    assert body["salary"] == "1200.50"


def test_blank_last_name_returns_field_errors(client: TestClient, admin: User) -> None:
    response = client.post(
        EMPLOYEES,
        json={"first_name": "Ada", "last_name": " ", "email": "not-an-email"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "validation_error"
    assert [e["field"] for e in body["errors"]] == ["last_name", "email"]
    assert client.get(EMPLOYEES, headers=auth_headers(admin)).json() == []


def test_employee_role_cannot_create_employees(client: TestClient, staff: User) -> None:
    response = client.post(
        EMPLOYEES,
        json={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        headers=auth_headers(staff),
    )

    assert response.status_code == 403


def test_update_employee(client: TestClient, manager: User) -> None:
    created = new_employee(client, manager)

    response = client.put(
        f"{EMPLOYEES}{created['id']}",
        json={"department": "Finance"},
        headers=auth_headers(manager),
    )

    assert response.status_code == 200
    assert response.json()["department"] == "Finance"
    assert response.json()["email"] == "ada@example.com"


def test_missing_employee_is_404(client: TestClient, admin: User) -> None:
    response = client.get(f"{EMPLOYEES}999", headers=auth_headers(admin))

    assert response.status_code == 404
    assert response.json()["error_code"] == "not_found"


def test_task_creation_defaults(client: TestClient, manager: User) -> None:
    task = new_task(client, manager)

    assert task["status"] == "PENDING"
    assert task["created_at"] == task["updated_at"]
    assert task["created_by_id"] == manager.id


def test_task_with_unknown_assignee_is_422(client: TestClient, manager: User) -> None:
    response = client.post(
        TASKS,
        json={"title": "Orphan", "assigned_to_id": 321},
        headers=auth_headers(manager),
    )

    assert response.status_code == 422
    assert response.json()["error_code"] == "referential_error"


def test_employee_role_cannot_create_tasks(client: TestClient, staff: User) -> None:
    response = client.post(TASKS, json={"title": "Sneaky"}, headers=auth_headers(staff))

    assert response.status_code == 403


def test_assignee_may_only_change_status(client: TestClient, admin: User, staff: User) -> None:
    employee = new_employee(client, admin, user_id=staff.id)
    task = new_task(client, admin, assigned_to_id=employee["id"])

    response = client.put(
        f"{TASKS}{task['id']}",
        json={"status": "IN_PROGRESS", "title": "Renamed"},
        headers=auth_headers(staff),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "IN_PROGRESS"
    assert body["title"] == "Write report"
    assert body["created_at"] == task["created_at"]


def test_non_assignee_cannot_update_task(client: TestClient, admin: User, staff: User) -> None:
    task = new_task(client, admin)

    response = client.put(
        f"{TASKS}{task['id']}",
        json={"status": "COMPLETED"},
        headers=auth_headers(staff),
    )

    assert response.status_code == 403


def test_status_cannot_be_cleared(client: TestClient, admin: User) -> None:
    task = new_task(client, admin)

    response = client.put(f"{TASKS}{task['id']}", json={"status": None}, headers=auth_headers(admin))

    assert response.status_code == 422


def test_list_tasks_filters_by_status(client: TestClient, admin: User) -> None:
    new_task(client, admin, title="Pending one")
    done = new_task(client, admin, title="Done one", status="COMPLETED")

    response = client.get(TASKS, params={"status": "COMPLETED"}, headers=auth_headers(admin))

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [done["id"]]


def test_deleting_employee_deletes_its_tasks(
    client: TestClient, admin: User, db: Session
) -> None:
    employee = new_employee(client, admin)
    first = new_task(client, admin, assigned_to_id=employee["id"])
    second = new_task(client, admin, assigned_to_id=employee["id"])
    unrelated = new_task(client, admin)

    response = client.delete(f"{EMPLOYEES}{employee['id']}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json() == {"id": employee["id"], "deleted_tasks": 2}
    for task in (first, second):
        assert client.get(f"{TASKS}{task['id']}", headers=auth_headers(admin)).status_code == 404
    assert client.get(f"{TASKS}{unrelated['id']}", headers=auth_headers(admin)).status_code == 200
    assert db.query(Task).filter(Task.assigned_to_id == employee["id"]).count() == 0


def test_removing_task_from_employee_deletes_it(client: TestClient, admin: User) -> None:
    employee = new_employee(client, admin)
    task = new_task(client, admin, assigned_to_id=employee["id"])

    response = client.delete(
        f"{EMPLOYEES}{employee['id']}/tasks/{task['id']}",
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert client.get(f"{TASKS}{task['id']}", headers=auth_headers(admin)).status_code == 404
    listing = client.get(f"{EMPLOYEES}{employee['id']}/tasks", headers=auth_headers(admin))
    assert listing.json() == []


def test_removing_foreign_task_is_404(client: TestClient, admin: User, db: Session) -> None:
    owner = new_employee(client, admin)
    other = new_employee(client, admin, email="other@example.com")
    task = new_task(client, admin, assigned_to_id=owner["id"])

    response = client.delete(
        f"{EMPLOYEES}{other['id']}/tasks/{task['id']}",
        headers=auth_headers(admin),
    )

    assert response.status_code == 404
    assert db.get(Task, task["id"]) is not None


def test_unknown_status_is_rejected(client: TestClient, admin: User) -> None:
    response = client.post(
        TASKS,
        json={"title": "Odd", "status": "BOGUS"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 422


def test_unexpected_failure_is_logged_and_returns_500(
    client: TestClient,
    admin: User,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def explode(self, data):
        raise RuntimeError("boom")

    monkeypatch.setattr(EmployeeRepository, "create_employee", explode)

    with caplog.at_level(logging.ERROR, logger="routers.v1.employees"):
        response = client.post(
            EMPLOYEES,
            json={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
            headers=auth_headers(admin),
        )

    assert response.status_code == 500
    record = next(r for r in caplog.records if r.name == "routers.v1.employees")
    assert record.getMessage() == "Unexpected error creating employee"
    assert record.exc_info is not None


def test_store_failure_on_read_returns_500(
    client: TestClient, admin: User, db: Session, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_scalars(*args, **kwargs):
        raise OperationalError("SELECT FROM tasks", {}, Exception("database is locked"))

    headers = auth_headers(admin)
    monkeypatch.setattr(db, "scalars", failing_scalars)

    response = client.get(TASKS, headers=headers)

    assert response.status_code == 500
    assert response.json()["error_code"] == "persistence_error"
