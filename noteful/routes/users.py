"""
Noteful API: User and Login Route Handlers
===========================================

Public routes (no token): signup and login.
Protected route: token refresh.

Signup and login sit behind the per-IP rate limiter (see
noteful.middleware.rate_limit) to slow down credential guessing.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.dependencies import get_auth_service, get_current_user
from noteful.schemas.common import ErrorResponse
from noteful.schemas.user import AuthToken, AuthUser, LoginRequest, UserCreate, UserResponse
from noteful.services.auth_service import AuthService
from noteful.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Missing or invalid field", "model": ErrorResponse},
        409: {"description": "Username taken", "model": ErrorResponse},
    },
    summary="Sign up",
)
async def create_user(
    payload: UserCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.create_user(db, payload)
    response.headers["Location"] = f"{request.url.path}/{user.id}"
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=AuthToken,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Exchange username and password for a bearer token",
)
async def login(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session),
) -> AuthToken:
    return await auth.login(db, payload.username, payload.password)


@router.post(
    "/refresh",
    response_model=AuthToken,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Issue a fresh token for the current user",
)
async def refresh(
    user: AuthUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
) -> AuthToken:
    return auth.create_token(user)
