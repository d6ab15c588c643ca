"""
Noteful API: Named Resource Service (folders and tags)
=======================================================

What:  Owner-scoped CRUD shared by folders and tags. Both are a `name` owned
       by one user, unique per user.
How:   Subclasses set `model` and `resource` and implement `_detach()`,
       which unhooks notes from a row that is about to be deleted.

Uniqueness is enforced by the (user_id, name) unique constraint; a
violation surfaces at flush as IntegrityError and becomes a 409.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import ConflictError, NotFoundError, ValidationError
from noteful.services.ids import parse_id, try_parse_id

logger = logging.getLogger(__name__)


class NamedResourceService(ABC):
    model: Any = None
    resource: str = "resource"

    async def list(self, db: AsyncSession, user_id: uuid.UUID) -> List[Any]:
        result = await db.execute(
            select(self.model).where(self.model.user_id == user_id).order_by(self.model.name)
        )
        return list(result.scalars().all())

    async def get(self, db: AsyncSession, user_id: uuid.UUID, resource_id: str) -> Any:
        return await self._get_owned(db, user_id, parse_id(resource_id))

    async def create(self, db: AsyncSession, user_id: uuid.UUID, name: Optional[str]) -> Any:
        row = self.model(name=self._require_name(name), user_id=user_id)
        db.add(row)
        await self._flush(db)
        logger.info("%s %s created for user %s", self.resource.capitalize(), row.id, user_id)
        return row

    async def update(
        self, db: AsyncSession, user_id: uuid.UUID, resource_id: str, name: Optional[str]
    ) -> Any:
        clean_name = self._require_name(name)
        row = await self._get_owned(db, user_id, parse_id(resource_id))
        row.name = clean_name
        await self._flush(db)
        return row

    async def delete(self, db: AsyncSession, user_id: uuid.UUID, resource_id: str) -> None:
        """Idempotent: unknown, foreign and malformed ids are a silent no-op."""
        resource_uuid = try_parse_id(resource_id)
        if resource_uuid is None:
            return

        owned = await db.execute(
            select(self.model.id).where(
                self.model.id == resource_uuid, self.model.user_id == user_id
            )
        )
        if owned.scalar_one_or_none() is None:
            return

        await self._detach(db, user_id, resource_uuid)
        await db.execute(delete(self.model).where(self.model.id == resource_uuid))
        logger.info("%s %s deleted for user %s", self.resource.capitalize(), resource_uuid, user_id)

    @abstractmethod
    async def _detach(self, db: AsyncSession, user_id: uuid.UUID, resource_uuid: uuid.UUID) -> None:
        """Unhooks the user's notes from a row that is about to be deleted."""

    def _require_name(self, name: Optional[str]) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(message="Missing `name` in request body", field="name")
        max_length = self.model.__table__.c.name.type.length
        if len(name.strip()) > max_length:
            raise ValidationError(
                message=f"Must be at most {max_length} characters long", field="name"
            )
        return name.strip()

    async def _get_owned(self, db: AsyncSession, user_id: uuid.UUID, resource_uuid: uuid.UUID) -> Any:
        result = await db.execute(
            select(self.model).where(
                self.model.id == resource_uuid, self.model.user_id == user_id
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=str(resource_uuid))
        return row

    async def _flush(self, db: AsyncSession) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            raise ConflictError(
                message=f"The {self.resource} name already exists",
                field="name",
            ) from e
