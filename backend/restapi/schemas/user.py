"""User & authentication schemas."""

from datetime import datetime

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """POST /login"""

    username: str
    password: str


class Token(BaseModel):
    """Login response."""

    token: str


class Identity(BaseModel):
    """The authenticated principal attached to a request."""

    id: str
    name: str


class User(BaseModel):
    id: str
    username: str
    hashed_password: str
    created_at: datetime

    model_config = {"from_attributes": True}
