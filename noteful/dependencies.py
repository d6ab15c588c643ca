"""
Noteful API: FastAPI Dependencies
==================================

What:  Request-scoped wiring: the authenticated identity and the services
       that need the injected Database.

Authentication:
    `get_current_user` reads `Authorization: Bearer <token>`. HTTPBearer runs
    with auto_error=False so a missing header raises our AuthenticationError
    (401 + WWW-Authenticate) instead of FastAPI's 403.
"""

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from noteful.database import Database, get_database
from noteful.exceptions import AuthenticationError
from noteful.schemas.user import AuthUser
from noteful.services.auth_service import AuthService, auth_service
from noteful.services.note_service import NoteService
from noteful.services.references import ReferenceValidator

http_bearer = HTTPBearer(auto_error=False)


def get_auth_service() -> AuthService:
    return auth_service


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> AuthUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Missing bearer token")
    return auth.decode_token(credentials.credentials)


def get_note_service(database: Database = Depends(get_database)) -> NoteService:
    return NoteService(ReferenceValidator(database))
