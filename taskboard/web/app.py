# taskboard/web/app.py
"""
Browser frontend for the task board.

Pages are rendered server side with Jinja2 and every read or write goes
through ``ApiClient`` to the JSON API, carrying the token of the visitor's
``AuthSession``.
"""

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, Form, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from taskboard.config.settings import Settings
from taskboard.web import board
from taskboard.web.client import ApiClient, ApiError
from taskboard.web.session import AuthSession, get_session, require_login

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.globals.update(
    row_class=board.row_class,
    is_due_today=board.is_due_today,
    quote_path=board.quote_path,
    format_completed_at=board.format_completed_at,
)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def get_client(request: Request) -> ApiClient:
    return request.app.state.client


def board_url(task_type: str) -> str:
    return f"/tasks/{task_type}"


def create_frontend_app(settings: Optional[Settings] = None, client: Optional[ApiClient] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Task Board", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.client = client or ApiClient(settings.api_base_url)
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret, same_site="lax")

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        session = get_session(request)
        if exc.is_auth_error:
            # the token is gone or expired on the server side
            session.logout()
            session.flash("Your session has expired. Please log in again.")
            return redirect("/login")

        if request.method == "GET":
            return templates.TemplateResponse(
                request, "error.html", {"message": exc.detail}, status_code=exc.status_code
            )

        session.flash(exc.detail)
        return redirect(request.headers.get("referer") or board_url(settings.default_task_type))

    # ---- auth pages ----

    @app.get("/login")
    def login_page(request: Request, session: AuthSession = Depends(get_session)):
        return templates.TemplateResponse(request, "login.html", {"flash": session.pop_flash()})

    @app.post("/login")
    def login(
        username: str = Form(""),
        password: str = Form(""),
        session: AuthSession = Depends(get_session),
        client: ApiClient = Depends(get_client),
    ):
        try:
            token = client.login(username, password)
        except ApiError as e:
            session.flash(f"Login failed: {e.detail}")
            return redirect("/login")

        session.login(token)
        return redirect(board_url(settings.default_task_type))

    @app.get("/register")
    def register_page(request: Request, session: AuthSession = Depends(get_session)):
        return templates.TemplateResponse(request, "register.html", {"flash": session.pop_flash()})

    @app.post("/register")
    def register(
        username: str = Form(""),
        password: str = Form(""),
        session: AuthSession = Depends(get_session),
        client: ApiClient = Depends(get_client),
    ):
        try:
            client.register(username, password)
        except ApiError as e:
            session.flash(f"Registration failed: {e.detail}")
            return redirect("/register")

        session.flash("Registration complete. Please log in.")
        return redirect("/login")

    @app.post("/logout")
    def logout(session: AuthSession = Depends(get_session)):
        session.logout()
        return redirect("/login")

    # ---- task board ----

    @app.get("/")
    def index(session: AuthSession = Depends(require_login)):
        return redirect(board_url(settings.default_task_type))

    @app.get("/tasks/{task_type}")
    def task_board(
        request: Request,
        task_type: str,
        q: str = "",
        edit: Optional[int] = None,
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        if q:
            tasks = client.search_tasks(session, q, task_type=task_type)
        else:
            tasks = client.list_tasks(session, task_type=task_type)
        assignee_suggestions = sorted(client.list_assignees(session))

        today = date.today()
        overdue, upcoming = board.partition_tasks(tasks, today)
        for task in overdue + upcoming:
            task["daysUntilDue"] = board.days_until_due(task, today)

        return templates.TemplateResponse(
            request,
            "board.html",
            {
                "task_type": task_type,
                "query": q,
                "editing_task_id": edit,
                "overdue_tasks": overdue,
                "upcoming_tasks": upcoming,
                "assignee_suggestions": assignee_suggestions,
                "flash": session.pop_flash(),
            },
        )

    @app.get("/tasks/{task_type}/deleted")
    def deleted_tasks(
        request: Request,
        task_type: str,
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        tasks = client.list_tasks(session, task_type=task_type, deleted=True)
        return templates.TemplateResponse(
            request,
            "deleted.html",
            {"task_type": task_type, "tasks": tasks, "flash": session.pop_flash()},
        )

    @app.get("/tasks/{task_type}/new")
    def new_task_page(
        request: Request,
        task_type: str,
        copy: Optional[int] = None,
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        assignee_suggestions = sorted(client.list_assignees(session))
        draft = {"taskName": "", "dueDate": "", "assignees": []}
        if copy is not None:
            source = next((t for t in client.list_tasks(session, task_type=task_type) if t["id"] == copy), None)
            if source is not None:
                draft = {
                    "taskName": source["taskName"],
                    "dueDate": source["dueDate"][:10],
                    "assignees": [a["name"] for a in source["assignees"]],
                }

        return templates.TemplateResponse(
            request,
            "task_form.html",
            {
                "task_type": task_type,
                "draft": draft,
                "assignee_suggestions": assignee_suggestions,
                "flash": session.pop_flash(),
            },
        )

    @app.post("/tasks/{task_type}/new")
    def create_task(
        task_type: str,
        task_name: str = Form(""),
        due_date: str = Form(""),
        assignees: List[str] = Form([]),
        new_assignees: str = Form(""),
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        names = board.join_assignees(assignees, new_assignees)
        try:
            client.create_task(session, task_name, names, due_date, task_type)
        except ApiError as e:
            if e.is_auth_error:
                raise
            session.flash(e.detail)
            return redirect(f"{board_url(task_type)}/new")
        return redirect(board_url(task_type))

    @app.post("/tasks/{task_type}/{task_id}/edit")
    def update_task(
        task_type: str,
        task_id: int,
        task_name: str = Form(""),
        due_date: str = Form(""),
        assignees: List[str] = Form([]),
        new_assignees: str = Form(""),
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        names = board.join_assignees(assignees, new_assignees)
        try:
            client.update_task(session, task_id, task_name, names, due_date, task_type)
        except ApiError as e:
            if e.is_auth_error:
                raise
            session.flash(f"Could not update the task: {e.detail}")
            return redirect(f"{board_url(task_type)}?edit={task_id}")
        return redirect(board_url(task_type))

    @app.post("/tasks/{task_type}/{task_id}/assignee")
    def update_assignee_progress(
        task_type: str,
        task_id: int,
        assignee_name: str = Form(...),
        completed: bool = Form(...),
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        client.update_assignee_progress(session, task_id, assignee_name, completed)
        return redirect(board_url(task_type))

    @app.post("/tasks/{task_type}/{task_id}/comment")
    def update_assignee_comment(
        task_type: str,
        task_id: int,
        assignee_name: str = Form(...),
        comment: str = Form(""),
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        # an emptied textarea arrives as "" and clears the comment
        client.update_assignee_comment(session, task_id, assignee_name, comment)
        return redirect(board_url(task_type))

    @app.post("/tasks/{task_type}/{task_id}/delete")
    def delete_task(
        task_type: str,
        task_id: int,
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        client.delete_task(session, task_id)
        return redirect(board_url(task_type))

    # ---- assignee management ----

    @app.get("/assignees")
    def assignees_page(
        request: Request,
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        return templates.TemplateResponse(
            request,
            "assignees.html",
            {
                "assignees": sorted(client.list_assignees(session)),
                "needs_password": settings.requires_registered_assignees,
                "task_type": settings.default_task_type,
                "flash": session.pop_flash(),
            },
        )

    @app.post("/assignees")
    def add_assignee(
        name: str = Form(""),
        password: str = Form(""),
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        try:
            client.add_assignee(session, name.strip(), password or None)
        except ApiError as e:
            if e.is_auth_error:
                raise
            if e.status_code == status.HTTP_409_CONFLICT:
                session.flash("This assignee has already been added.")
            else:
                session.flash(e.detail)
        return redirect("/assignees")

    @app.post("/assignees/{name:path}/delete")
    def delete_assignee(
        name: str,
        session: AuthSession = Depends(require_login),
        client: ApiClient = Depends(get_client),
    ):
        client.delete_assignee(session, name)
        return redirect("/assignees")

    return app
