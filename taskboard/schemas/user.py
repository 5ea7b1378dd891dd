from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserRegistered(BaseModel):
    message: str
    username: str


class AssigneeCreate(BaseModel):
    name: Optional[str] = None
    # only used when assignees must be registered users
    password: Optional[str] = None


class AssigneeOut(BaseModel):
    name: str
