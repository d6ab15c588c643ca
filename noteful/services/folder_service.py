"""Folder CRUD. Deleting a folder keeps its notes and clears their folder."""

import uuid

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.folder import Folder
from noteful.models.note import Note
from noteful.services.named_resource import NamedResourceService


class FolderService(NamedResourceService):
    model = Folder
    resource = "folder"

    async def _detach(self, db: AsyncSession, user_id: uuid.UUID, resource_uuid: uuid.UUID) -> None:
        await db.execute(
            update(Note)
            .where(Note.folder_id == resource_uuid, Note.user_id == user_id)
            .values(folder_id=None)
        )


folder_service = FolderService()
