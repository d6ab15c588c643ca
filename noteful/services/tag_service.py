"""Tag CRUD. Deleting a tag removes it from every note that carried it."""

import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.note import notes_tags
from noteful.models.tag import Tag
from noteful.services.named_resource import NamedResourceService


class TagService(NamedResourceService):
    model = Tag
    resource = "tag"

    async def _detach(self, db: AsyncSession, user_id: uuid.UUID, resource_uuid: uuid.UUID) -> None:
        await db.execute(delete(notes_tags).where(notes_tags.c.tag_id == resource_uuid))


tag_service = TagService()
