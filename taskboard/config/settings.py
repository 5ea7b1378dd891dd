# taskboard/config/settings.py
# Runtime configuration for the API and the frontend

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ASSIGNEE_POLICIES = ("registered", "open")

_DEV_JWT_SECRET = "taskboard-dev-jwt-secret"
_DEV_SESSION_SECRET = "taskboard-dev-session-secret"


class Settings:
    """Configuration shared by the API and the frontend.

    Built once at startup (usually with ``Settings.from_env()``) and handed
    to the application factories, which keep it on ``app.state.settings``.
    """

    def __init__(
        self,
        data_dir: str = "data",
        host: str = "0.0.0.0",
        port: int = 5000,
        reload: bool = False,
        cors_origins: Optional[List[str]] = None,
        jwt_secret: str = _DEV_JWT_SECRET,
        jwt_algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
        assignee_policy: str = "registered",
        log_level: str = "INFO",
        api_base_url: str = "http://localhost:5000",
        frontend_port: int = 3000,
        session_secret: str = _DEV_SESSION_SECRET,
        default_task_type: str = "office",
    ):
        if assignee_policy not in ASSIGNEE_POLICIES:
            raise ValueError(
                f"ASSIGNEE_POLICY must be one of {', '.join(ASSIGNEE_POLICIES)}, got '{assignee_policy}'"
            )

        self.data_dir = Path(data_dir)
        self.host = host
        self.port = port
        self.reload = reload
        self.cors_origins = cors_origins or ["http://localhost:3000"]
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.assignee_policy = assignee_policy
        self.log_level = log_level.upper()
        self.api_base_url = api_base_url.rstrip("/")
        self.frontend_port = frontend_port
        self.session_secret = session_secret
        self.default_task_type = default_task_type

    # JSON documents
    @property
    def tasks_file(self) -> Path:
        return self.data_dir / "tasks.json"

    @property
    def assignees_file(self) -> Path:
        return self.data_dir / "assignees.json"

    @property
    def users_file(self) -> Path:
        return self.data_dir / "users.json"

    @property
    def requires_registered_assignees(self) -> bool:
        return self.assignee_policy == "registered"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment (and ``.env`` if present)"""
        load_dotenv()

        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            logger.warning("JWT_SECRET is not set, using the development secret")
            jwt_secret = _DEV_JWT_SECRET

        session_secret = os.getenv("SESSION_SECRET")
        if not session_secret:
            logger.warning("SESSION_SECRET is not set, using the development secret")
            session_secret = _DEV_SESSION_SECRET

        origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGIN", "http://localhost:3000").split(",")
            if origin.strip()
        ]

        return cls(
            data_dir=os.getenv("DATA_DIR", "data"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            reload=os.getenv("RELOAD", "false").lower() == "true",
            cors_origins=origins,
            jwt_secret=jwt_secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
            assignee_policy=os.getenv("ASSIGNEE_POLICY", "registered").lower(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            api_base_url=os.getenv("API_BASE_URL", "http://localhost:5000"),
            frontend_port=int(os.getenv("FRONTEND_PORT", "3000")),
            session_secret=session_secret,
            default_task_type=os.getenv("DEFAULT_TASK_TYPE", "office"),
        )
