import logging

from fastapi import APIRouter, Depends, Request, status

from taskboard.routers.deps import get_user_directory
from taskboard.schemas.tokens import Token
from taskboard.schemas.user import UserCreate, UserLogin, UserRegistered
from taskboard.services.directory import UserDirectory
from taskboard.utils.errors import BadRequest
from taskboard.utils.security import create_access_token, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserRegistered, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, users: UserDirectory = Depends(get_user_directory)):
    username = users.register(user.username, user.password)
    return {"message": "User registered successfully.", "username": username}


@router.post("/login", response_model=Token)
def login(user: UserLogin, request: Request, users: UserDirectory = Depends(get_user_directory)):
    db_user = users.get(user.username) if user.username else None
    # same answer for unknown user and wrong password
    if not db_user or not user.password or not verify_password(user.password, db_user["password"]):
        logger.warning("Failed login attempt")
        raise BadRequest("Invalid credentials")

    settings = request.app.state.settings
    token = create_access_token(
        data={"sub": db_user["username"]},
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )
    logger.info(f"User '{db_user['username']}' logged in")
    return {"token": token, "token_type": "bearer", "username": db_user["username"]}
