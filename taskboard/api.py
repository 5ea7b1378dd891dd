# taskboard/api.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.config.settings import Settings
from taskboard.database import Database
from taskboard.routers import assignees, auth, tasks

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the JSON API around the given settings (read from the environment by default)"""
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Task Board API")
    app.state.settings = settings
    app.state.db = Database.from_settings(settings)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Route registration
    app.include_router(auth.router, prefix="/api", tags=["Authentication"])
    app.include_router(assignees.router, prefix="/api", tags=["Assignees"])
    app.include_router(tasks.router, prefix="/api", tags=["Tasks"])

    # Root route
    @app.get("/")
    def read_root():
        return {"message": "Task Board API"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info(
        f"Task Board API ready (data dir: {settings.data_dir}, assignee policy: {settings.assignee_policy})"
    )
    return app

