# taskboard/schemas/tokens.py
from pydantic import BaseModel


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    username: str


class TokenData(BaseModel):
    username: str
