# taskboard/web/session.py
from typing import Optional

from fastapi import HTTPException, Request


class AuthSession:
    """The browser's login state: one API token kept in the signed session cookie"""

    TOKEN_KEY = "token"
    FLASH_KEY = "flash"

    def __init__(self, storage: dict):
        self._storage = storage

    @property
    def token(self) -> Optional[str]:
        return self._storage.get(self.TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def login(self, token: str):
        self._storage[self.TOKEN_KEY] = token

    def logout(self):
        self._storage.pop(self.TOKEN_KEY, None)

    def flash(self, message: str):
        self._storage[self.FLASH_KEY] = message

    def pop_flash(self) -> Optional[str]:
        return self._storage.pop(self.FLASH_KEY, None)


def get_session(request: Request) -> AuthSession:
    return AuthSession(request.session)


def require_login(request: Request) -> AuthSession:
    session = get_session(request)
    if not session.is_authenticated:
        raise HTTPException(status_code=302, headers={"Location": "/login"})
    return session
