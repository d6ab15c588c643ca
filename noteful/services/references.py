"""
Noteful API: Reference Validators
==================================

What:  Confirms that the folder and tags a note write points at exist AND
       belong to the writer.
When:  Before every note create and update; the write only proceeds when both
       checks pass.
How:   The two checks are independent reads, so `validate()` runs them
       concurrently with asyncio.gather. An AsyncSession cannot run two
       statements at once, so each check opens its own short-lived session
       from the injected Database.

Privacy:
    "Does not exist" and "belongs to someone else" raise the same error, so a
    caller cannot probe for other users' folder or tag ids.
"""

import asyncio
import logging
import uuid
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select

from noteful.database import Database
from noteful.exceptions import InvalidFolderError, InvalidTagError
from noteful.models.folder import Folder
from noteful.models.tag import Tag
from noteful.services.ids import try_parse_id

logger = logging.getLogger(__name__)


class ReferenceValidator:
    def __init__(self, database: Database):
        self.database = database

    async def validate_folder(
        self, user_id: uuid.UUID, folder_id: Optional[str]
    ) -> Optional[uuid.UUID]:
        """
        Returns the folder's UUID, or None when no folder was requested.

        Raises:
            InvalidFolderError: malformed id, unknown folder, or another user's folder
        """
        if not folder_id:
            return None

        folder_uuid = try_parse_id(folder_id)
        if folder_uuid is None:
            logger.warning("Rejected malformed folder id for user %s", user_id)
            raise InvalidFolderError(str(folder_id))

        async with self.database.session() as session:
            result = await session.execute(
                select(Folder.id).where(Folder.id == folder_uuid, Folder.user_id == user_id)
            )
            if result.scalar_one_or_none() is None:
                logger.warning("Rejected folder %s for user %s", folder_uuid, user_id)
                raise InvalidFolderError(str(folder_id))

        return folder_uuid

    async def validate_tags(
        self, user_id: uuid.UUID, tag_ids: Optional[Sequence[str]]
    ) -> List[uuid.UUID]:
        """
        Returns the distinct tag UUIDs in request order.

        A repeated id counts once: a note's tags are a set.

        Raises:
            InvalidTagError: any id is malformed, unknown, or another user's tag
        """
        if not tag_ids:
            return []

        parsed = [try_parse_id(tag_id) for tag_id in tag_ids]
        if any(tag_uuid is None for tag_uuid in parsed):
            logger.warning("Rejected malformed tag id for user %s", user_id)
            raise InvalidTagError([str(tag_id) for tag_id in tag_ids])

        requested = list(dict.fromkeys(parsed))
        async with self.database.session() as session:
            result = await session.execute(
                select(func.count(Tag.id)).where(Tag.id.in_(requested), Tag.user_id == user_id)
            )
            matched = result.scalar() or 0

        if matched != len(requested):
            logger.warning(
                "Rejected tags for user %s: %d of %d owned", user_id, matched, len(requested)
            )
            raise InvalidTagError([str(tag_id) for tag_id in tag_ids])

        return requested

    async def validate(
        self,
        user_id: uuid.UUID,
        folder_id: Optional[str],
        tag_ids: Optional[Sequence[str]],
    ) -> Tuple[Optional[uuid.UUID], List[uuid.UUID]]:
        """
        Runs both checks concurrently and waits for both.

        When both fail, the folder error is raised, whichever finished first.
        """
        folder_outcome, tags_outcome = await asyncio.gather(
            self.validate_folder(user_id, folder_id),
            self.validate_tags(user_id, tag_ids),
            return_exceptions=True,
        )
        for outcome in (folder_outcome, tags_outcome):
            if isinstance(outcome, BaseException):
                raise outcome
        return folder_outcome, tags_outcome
