"""
Noteful API: User and Authentication Schemas
=============================================

Signup accepts `Any` for the credential fields so the service can report
"must be a string" and "missing field" as 400s with a specific message
instead of FastAPI's generic 422.
"""

import uuid
from typing import Any, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Body of POST /api/users."""
    fullname: Optional[Any] = Field(default=None)
    username: Optional[Any] = Field(default=None)
    password: Optional[Any] = Field(default=None)


class UserResponse(BaseModel):
    """A user as exposed over the API. The password hash is never included."""
    id: uuid.UUID
    fullname: str
    username: str

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class AuthToken(BaseModel):
    auth_token: str = Field(alias="authToken", description="Bearer token for the Authorization header")

    model_config = {"populate_by_name": True}


class AuthUser(BaseModel):
    """
    Identity carried inside a bearer token.

    Built by `get_current_user` and handed to every protected route; its `id`
    is the owner filter for all queries in that request.
    """
    id: uuid.UUID
    username: str
    fullname: str = ""
