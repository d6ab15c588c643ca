"""
Noteful API: User Service (signup)
===================================

What:  Validates signup input and creates the user.
How:   Checks run in a fixed order so the client always gets the first
       problem: required fields, then types, then surrounding whitespace,
       then lengths. The plaintext password only ever reaches
       `User.with_password()`, which hashes it.

bcrypt is CPU-bound (tens of milliseconds at the default cost), so hashing
runs in a worker thread instead of on the event loop.
"""

import asyncio
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import ConflictError, ValidationError
from noteful.models.user import User
from noteful.schemas.user import UserCreate
from noteful.services.passwords import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "password")
STRING_FIELDS = ("username", "password", "fullname")
# Leading/trailing whitespace in credentials is almost always a paste error
TRIMMED_FIELDS = ("username", "password")
MIN_USERNAME_LENGTH = 1
MIN_PASSWORD_LENGTH = 8


class UserService:
    async def create_user(self, db: AsyncSession, payload: UserCreate) -> User:
        """
        Raises:
            ValidationError: missing field, wrong type, whitespace, or bad length
            ConflictError: the username is taken
        """
        values = payload.model_dump()
        self._validate(values)

        user = await asyncio.to_thread(
            User.with_password,
            username=values["username"],
            password=values["password"],
            fullname=(values.get("fullname") or "").strip(),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(message="The username already exists", field="username") from e

        logger.info("User %s created (%s)", user.id, user.username)
        return user

    @staticmethod
    def _validate(values: dict) -> None:
        for field in REQUIRED_FIELDS:
            if values.get(field) is None:
                raise ValidationError(message="Missing field", field=field)

        for field in STRING_FIELDS:
            value = values.get(field)
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    message="Incorrect field type: expected string", field=field
                )

        for field in TRIMMED_FIELDS:
            if values[field].strip() != values[field]:
                raise ValidationError(
                    message="Cannot start or end with whitespace", field=field
                )

        if len(values["username"]) < MIN_USERNAME_LENGTH:
            raise ValidationError(
                message=f"Must be at least {MIN_USERNAME_LENGTH} characters long",
                field="username",
            )
        for field in ("username", "fullname"):
            max_length = User.__table__.c[field].type.length
            if len(values.get(field) or "") > max_length:
                raise ValidationError(
                    message=f"Must be at most {max_length} characters long",
                    field=field,
                )
        if len(values["password"]) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                message=f"Must be at least {MIN_PASSWORD_LENGTH} characters long",
                field="password",
            )
        if len(values["password"].encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                message=f"Must be at most {MAX_PASSWORD_BYTES} characters long",
                field="password",
            )


user_service = UserService()
