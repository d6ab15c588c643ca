"""
Noteful API: Authentication Service
====================================

What:  Username/password login and the HS256 bearer tokens that carry a
       user's identity between requests.

Token Claims:
    {
        "user": {"id": "...", "username": "...", "fullname": "..."},
        "sub":  "<username>",
        "iat":  <issued at>,
        "exp":  <issued at + JWT_EXPIRY_SECONDS>
    }

Wrong username and wrong password produce the same error so login cannot be
used to discover which usernames exist.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import Settings, settings
from noteful.exceptions import AuthenticationError
from noteful.models.user import User
from noteful.schemas.user import AuthToken, AuthUser

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, config: Settings = settings):
        self.config = config

    def create_token(self, user: AuthUser) -> AuthToken:
        now = datetime.now(timezone.utc)
        claims = {
            "user": user.model_dump(mode="json"),
            "sub": user.username,
            "iat": now,
            "exp": now + timedelta(seconds=self.config.jwt_expiry_seconds),
        }
        token = jwt.encode(claims, self.config.jwt_secret, algorithm=self.config.jwt_algorithm)
        return AuthToken(auth_token=token)

    def decode_token(self, token: str) -> AuthUser:
        """
        Raises:
            AuthenticationError: expired, badly signed, or malformed token
        """
        try:
            claims = jwt.decode(
                token,
                self.config.jwt_secret,
                algorithms=[self.config.jwt_algorithm],
                options={"require": ["exp", "sub"]},
            )
            return AuthUser.model_validate(claims["user"])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError(message="Token expired") from e
        except (jwt.InvalidTokenError, KeyError, PydanticValidationError) as e:
            raise AuthenticationError(message="Invalid token") from e

    async def login(self, db: AsyncSession, username: str | None, password: str | None) -> AuthToken:
        """
        Raises:
            AuthenticationError: unknown user or wrong password
        """
        if not username or not password:
            raise AuthenticationError(message="Invalid credentials")

        result = await db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()

        if user is None or not await asyncio.to_thread(user.verify_password, password):
            logger.warning("Failed login for username '%s'", username)
            raise AuthenticationError(message="Invalid credentials")

        logger.info("User %s logged in", user.id)
        return self.create_token(AuthUser.model_validate(user, from_attributes=True))


auth_service = AuthService()
