# taskboard/web/client.py
"""
HTTP client the frontend uses to talk to the Task Board API.

The client holds no credentials of its own: every authenticated call takes
the caller's ``AuthSession`` and sends its token as a bearer header.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the API"""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class ApiClient:
    def __init__(self, base_url: str, http=None):
        # ``http`` is anything with a requests-style interface (a requests.Session,
        # or a TestClient in tests, where base_url is left empty)
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()

    def _request(self, method: str, path: str, session=None, **kwargs):
        headers = kwargs.pop("headers", {})
        if session is not None and session.token:
            headers["Authorization"] = f"Bearer {session.token}"

        response = self.http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            logger.warning(f"{method} {path} failed with {response.status_code}: {detail}")
            raise ApiError(response.status_code, str(detail))

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # auth
    def register(self, username: str, password: str) -> dict:
        return self._request("POST", "/api/register", json={"username": username, "password": password})

    def login(self, username: str, password: str) -> str:
        data = self._request("POST", "/api/login", json={"username": username, "password": password})
        return data["token"]

    # assignees
    def list_assignees(self, session) -> List[str]:
        return self._request("GET", "/api/assignees", session)

    def add_assignee(self, session, name: str, password: Optional[str] = None) -> dict:
        payload = {"name": name}
        if password:
            payload["password"] = password
        return self._request("POST", "/api/assignees", session, json=payload)

    def delete_assignee(self, session, name: str):
        self._request("DELETE", f"/api/assignees/{quote(name, safe='')}", session)

    # tasks
    def list_tasks(self, session, task_type: Optional[str] = None, deleted: bool = False) -> List[dict]:
        params = {}
        if task_type:
            params["type"] = task_type
        if deleted:
            params["deleted"] = "true"
        return self._request("GET", "/api/tasks", session, params=params)

    def search_tasks(self, session, query: str, task_type: Optional[str] = None) -> List[dict]:
        params = {"q": query}
        if task_type:
            params["type"] = task_type
        return self._request("GET", "/api/tasks/search", session, params=params)

    def create_task(self, session, task_name: str, assignees: str, due_date: str, task_type: str) -> dict:
        payload = {"taskName": task_name, "assignees": assignees, "dueDate": due_date, "taskType": task_type}
        return self._request("POST", "/api/tasks", session, json=payload)

    def update_task(self, session, task_id: int, task_name: str, assignees: str, due_date: str, task_type: str) -> dict:
        payload = {"taskName": task_name, "assignees": assignees, "dueDate": due_date, "taskType": task_type}
        return self._request("PUT", f"/api/tasks/{task_id}", session, json=payload)

    def update_assignee_progress(self, session, task_id: int, assignee_name: str, completed: bool) -> dict:
        payload = {"assigneeName": assignee_name, "completed": completed}
        return self._request("PUT", f"/api/tasks/{task_id}/assignee", session, json=payload)

    def update_assignee_comment(self, session, task_id: int, assignee_name: str, comment: str) -> dict:
        payload = {"assigneeName": assignee_name, "comment": comment}
        return self._request("PUT", f"/api/tasks/{task_id}/assignee", session, json=payload)

    def delete_task(self, session, task_id: int) -> dict:
        return self._request("DELETE", f"/api/tasks/{task_id}", session)
