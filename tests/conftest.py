# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.api import create_app
from taskboard.config.settings import Settings
from taskboard.database import Database
from taskboard.services.directory import AssigneeDirectory, UserDirectory
from taskboard.services.task_repository import TaskRepository

PASSWORD = "s3cret-pass"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Registered-assignee settings with every document under tmp_path"""
    return Settings(
        data_dir=str(tmp_path / "data"),
        jwt_secret="test-secret",
        session_secret="test-session-secret",
        assignee_policy="registered",
    )


@pytest.fixture()
def open_settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=str(tmp_path / "data"),
        jwt_secret="test-secret",
        session_secret="test-session-secret",
        assignee_policy="open",
    )


@pytest.fixture()
def db(settings: Settings) -> Database:
    return Database.from_settings(settings)


@pytest.fixture()
def users(db: Database) -> UserDirectory:
    return UserDirectory(db)


@pytest.fixture()
def open_repo(db: Database) -> TaskRepository:
    """Repository whose assignees are free text labels"""
    return TaskRepository(db, AssigneeDirectory(db))


@pytest.fixture()
def registered_repo(db: Database, users: UserDirectory) -> TaskRepository:
    return TaskRepository(db, users)


@pytest.fixture()
def api(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture()
def open_api(open_settings: Settings) -> TestClient:
    return TestClient(create_app(open_settings))


def login_headers(client: TestClient, username: str, password: str = PASSWORD) -> dict:
    client.post("/api/register", json={"username": username, "password": password})
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def auth_headers(api: TestClient) -> dict:
    """Logged in as "Alice"; "Bob" is registered too"""
    api.post("/api/register", json={"username": "Bob", "password": PASSWORD})
    return login_headers(api, "Alice")


@pytest.fixture()
def open_auth_headers(open_api: TestClient) -> dict:
    return login_headers(open_api, "admin")


@pytest.fixture()
def headers_for(api: TestClient):
    """Register (if needed) and log in any user against the registered-policy API"""
    return lambda username, password=PASSWORD: login_headers(api, username, password)
