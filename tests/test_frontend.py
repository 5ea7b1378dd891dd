# tests/test_frontend.py

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from taskboard.web.app import create_frontend_app
from taskboard.web.client import ApiClient

from .conftest import PASSWORD


@pytest.fixture()
def web(api, settings):
    """Frontend whose API client talks to the in-process API"""
    client = ApiClient("", http=api)
    return TestClient(create_frontend_app(settings, client=client))


@pytest.fixture()
def logged_in(web):
    web.post("/register", data={"username": "Alice", "password": PASSWORD})
    response = web.post("/login", data={"username": "Alice", "password": PASSWORD}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/tasks/office"
    return web


def due_in(days):
    return (date.today() + timedelta(days=days)).isoformat()


def test_guard_redirects_to_login(web):
    for path in ["/", "/tasks/office", "/tasks/office/new", "/tasks/office/deleted", "/assignees"]:
        response = web.get(path, follow_redirects=False)
        assert response.status_code == 302, path
        assert response.headers["location"] == "/login"


def test_login_page_and_failed_login(web):
    assert web.get("/login").status_code == 200

    response = web.post("/login", data={"username": "ghost", "password": "x"})

    assert response.status_code == 200
    assert "Invalid credentials" in response.text


def test_register_duplicate_shows_message(web):
    web.post("/register", data={"username": "Alice", "password": PASSWORD})

    response = web.post("/register", data={"username": "Alice", "password": PASSWORD})

    assert "Username already exists." in response.text


def test_board_splits_overdue_and_upcoming(logged_in, api):
    for name, days in [("Later", 10), ("Today", 0), ("Late", -2)]:
        logged_in.post(
            "/tasks/office/new",
            data={"task_name": name, "due_date": due_in(days), "assignees": ["Alice"]},
        )

    page = logged_in.get("/tasks/office").text

    current, _, overdue = page.partition("Overdue tasks")
    assert current.index("Today") < current.index("Later")
    assert "Late<" not in current
    assert "Late" in overdue
    assert 'class="due-soon-red"' in page
    assert "Due today!" in page


def test_overdue_task_has_no_due_today_badge(logged_in):
    logged_in.post(
        "/tasks/office/new",
        data={"task_name": "Late", "due_date": due_in(-3), "assignees": ["Alice"]},
    )

    page = logged_in.get("/tasks/office").text

    assert 'class="overdue"' in page
    assert "Due today!" not in page


def test_toggle_comment_edit_copy_and_delete(logged_in, api, settings):
    logged_in.post(
        "/tasks/office/new",
        data={"task_name": "Report", "due_date": due_in(5), "assignees": ["Alice"]},
    )
    headers = {"Authorization": f"Bearer {api.post('/api/login', json={'username': 'Alice', 'password': PASSWORD}).json()['token']}"}
    task = api.get("/api/tasks", headers=headers).json()[0]

    logged_in.post(f"/tasks/office/{task['id']}/assignee", data={"assignee_name": "Alice", "completed": "true"})
    logged_in.post(f"/tasks/office/{task['id']}/comment", data={"assignee_name": "Alice", "comment": "sent"})
    alice = api.get("/api/tasks", headers=headers).json()[0]["assignees"][0]
    assert alice["completed"] is True
    assert alice["comment"] == "sent"

    # an emptied textarea posts "" and clears the stored comment
    logged_in.post(f"/tasks/office/{task['id']}/comment", data={"assignee_name": "Alice", "comment": ""})
    cleared = api.get("/api/tasks", headers=headers).json()[0]["assignees"][0]
    assert cleared["comment"] == ""
    assert cleared["completedAt"] == alice["completedAt"]

    edit_form = logged_in.get(f"/tasks/office?edit={task['id']}").text
    assert f'action="/tasks/office/{task["id"]}/edit"' in edit_form
    logged_in.post(
        f"/tasks/office/{task['id']}/edit",
        data={"task_name": "Report v2", "due_date": due_in(6), "assignees": ["Alice"]},
    )
    updated = api.get("/api/tasks", headers=headers).json()[0]
    assert updated["taskName"] == "Report v2"
    assert updated["assignees"][0]["completed"] is True

    copy_page = logged_in.get(f"/tasks/office/new?copy={task['id']}").text
    assert 'value="Report v2"' in copy_page

    logged_in.post(f"/tasks/office/{task['id']}/delete")
    assert api.get("/api/tasks", headers=headers).json() == []
    assert "Report v2" in logged_in.get("/tasks/office/deleted").text


def test_create_with_unknown_assignee_flashes_error(logged_in):
    response = logged_in.post(
        "/tasks/office/new",
        data={"task_name": "Report", "due_date": due_in(1), "new_assignees": "Nobody"},
    )

    assert "not registered users: Nobody" in response.text


def test_assignee_management(logged_in):
    logged_in.post("/assignees", data={"name": "Carol", "password": "pw"})
    page = logged_in.get("/assignees").text
    assert "Carol" in page

    duplicate = logged_in.post("/assignees", data={"name": "Carol", "password": "pw"})
    assert "already been added" in duplicate.text

    logged_in.post("/assignees/Carol/delete")
    assert "Carol" not in logged_in.get("/assignees").text


def test_assignee_with_slash_in_name_can_be_deleted(logged_in):
    logged_in.post("/assignees", data={"name": "R&D/Ops", "password": "pw"})
    page = logged_in.get("/assignees").text
    assert 'action="/assignees/R%26D%2FOps/delete"' in page

    logged_in.post("/assignees/R%26D%2FOps/delete")

    assert "R&amp;D/Ops" not in logged_in.get("/assignees").text


def test_search_box(logged_in):
    for name in ["Quarterly report", "Order toner"]:
        logged_in.post("/tasks/office/new", data={"task_name": name, "due_date": due_in(3), "assignees": ["Alice"]})

    page = logged_in.get("/tasks/office", params={"q": "toner"}).text

    assert "Order toner" in page
    assert "Quarterly report" not in page


def test_rejected_token_logs_out(logged_in, settings):
    settings.jwt_secret = "rotated-secret"

    response = logged_in.get("/tasks/office", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"
    assert "session has expired" in logged_in.get("/login").text
    assert logged_in.get("/tasks/office", follow_redirects=False).status_code == 302


def test_logout(logged_in):
    logged_in.post("/logout")

    assert logged_in.get("/tasks/office", follow_redirects=False).status_code == 302
