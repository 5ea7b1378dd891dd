# taskboard/utils/auth.py
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from taskboard.schemas.tokens import TokenData
from taskboard.utils.errors import Forbidden, Unauthorized
from taskboard.utils.security import verify_token

logger = logging.getLogger(__name__)

# auto_error is off so a missing token (401) can be told apart from a bad one (403)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def get_current_user(request: Request, token: Optional[str] = Depends(oauth2_scheme)) -> TokenData:
    if not token:
        raise Unauthorized()

    settings = request.app.state.settings
    payload = verify_token(token, settings.jwt_secret, settings.jwt_algorithm)
    if payload is None:
        logger.warning(f"Rejected invalid or expired token on {request.url.path}")
        raise Forbidden()

    username = payload.get("sub")
    if not username:
        logger.warning(f"Rejected token without subject on {request.url.path}")
        raise Forbidden()

    return TokenData(username=username)
