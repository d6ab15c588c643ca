"""
Noteful API: Note Service
==========================

What:  Owner-scoped note CRUD, listing filters and full-text search.
Who:   Called by the /api/notes route handlers.

Write Flow (create / update):
    ┌──────────────┐    ┌──────────────────────┐    ┌──────────────┐
    │ Title check  │───▶│ Reference validation │───▶│ Insert/Update│
    │ (400)        │    │ folder ∥ tags  (400) │    │ (flush)      │
    └──────────────┘    └──────────────────────┘    └──────────────┘

    Nothing is written unless every check before it passed.

Ownership:
    Every query carries `Note.user_id == user_id`. A note owned by somebody
    else behaves exactly like a note that does not exist (404).

Delete Policy:
    Idempotent. Deleting a missing, foreign or malformed id succeeds
    silently and the route answers 204 either way.
"""

import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models.note import Note
from noteful.models.tag import Tag
from noteful.schemas.note import NoteListItem, NoteResponse, NoteWrite
from noteful.services.ids import parse_id, try_parse_id
from noteful.services.references import ReferenceValidator
from noteful.services.search import build_search

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic for notes.

    Holds a ReferenceValidator (which needs the Database to open its own
    sessions); everything request-specific is passed per call.
    """

    def __init__(self, references: ReferenceValidator):
        self.references = references

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_notes(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteListItem]:
        """
        Lists the user's notes, optionally narrowed by folder, tag and search term.

        Ordering:
            with a search term: relevance (descending), then creation time
            without:            creation time (ascending)

        Raises:
            ValidationError: folderId or tagId is not a valid id
        """
        query = select(Note).where(Note.user_id == user_id)

        if folder_id:
            query = query.where(Note.folder_id == parse_id(folder_id, "folderId"))

        if tag_id:
            tag_uuid = parse_id(tag_id, "tagId")
            query = query.where(Note.tags.any(Tag.id == tag_uuid))

        term = (search_term or "").strip()
        if not term:
            result = await db.execute(query.order_by(asc(Note.created_at)))
            return [NoteListItem.from_note(note) for note in result.scalars().all()]

        match, score = build_search(db.get_bind().dialect.name, term)
        score = score.label("score")
        query = (
            query.add_columns(score)
            .where(match)
            .order_by(desc(score), asc(Note.created_at))
        )
        result = await db.execute(query)
        return [
            NoteListItem.from_note(note, score=float(note_score or 0))
            for note, note_score in result.all()
        ]

    async def get_note(self, db: AsyncSession, user_id: uuid.UUID, note_id: str) -> NoteResponse:
        """
        Raises:
            ValidationError: malformed id
            NotFoundError: no note with this id owned by the user
        """
        note = await self._get_owned_note(db, user_id, parse_id(note_id))
        return NoteResponse.from_note(note)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_note(
        self, db: AsyncSession, user_id: uuid.UUID, payload: NoteWrite
    ) -> NoteResponse:
        """
        Raises:
            ValidationError: missing title
            InvalidFolderError / InvalidTagError: reference not owned by the user
            DatabaseError: the insert failed
        """
        title = self._require_title(payload.title)
        folder_uuid, tag_uuids = await self.references.validate(
            user_id, payload.folder_id, payload.tags
        )

        note = Note(
            title=title,
            content=payload.content if payload.content is not None else "",
            folder_id=folder_uuid,
            user_id=user_id,
            tags=await self._load_tags(db, user_id, tag_uuids),
        )
        db.add(note)
        await self._flush(db, "create", user_id)

        logger.info("Note %s created for user %s", note.id, user_id)
        return NoteResponse.from_note(note)

    async def update_note(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        note_id: str,
        payload: NoteWrite,
    ) -> NoteResponse:
        """
        Replaces title, content, folder and tags of an owned note.

        An empty or absent folderId clears the folder; an absent tags list
        clears the tags.

        Raises:
            ValidationError: missing title or malformed id
            InvalidFolderError / InvalidTagError: reference not owned by the user
            NotFoundError: no note with this id owned by the user
        """
        title = self._require_title(payload.title)
        note_uuid = parse_id(note_id)
        folder_uuid, tag_uuids = await self.references.validate(
            user_id, payload.folder_id, payload.tags
        )

        note = await self._get_owned_note(db, user_id, note_uuid)
        note.title = title
        note.content = payload.content if payload.content is not None else ""
        note.folder_id = folder_uuid
        note.tags = await self._load_tags(db, user_id, tag_uuids)
        await self._flush(db, "update", user_id)

        logger.info("Note %s updated for user %s", note.id, user_id)
        return NoteResponse.from_note(note)

    async def delete_note(self, db: AsyncSession, user_id: uuid.UUID, note_id: str) -> None:
        note_uuid = try_parse_id(note_id)
        if note_uuid is None:
            return

        result = await db.execute(
            delete(Note).where(Note.id == note_uuid, Note.user_id == user_id)
        )
        if result.rowcount:
            logger.info("Note %s deleted for user %s", note_uuid, user_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _require_title(title: Optional[str]) -> str:
        if not title:
            raise ValidationError(message="Missing `title` in request body", field="title")
        max_length = Note.__table__.c.title.type.length
        if len(title) > max_length:
            raise ValidationError(
                message=f"Must be at most {max_length} characters long", field="title"
            )
        return title

    @staticmethod
    async def _get_owned_note(db: AsyncSession, user_id: uuid.UUID, note_uuid: uuid.UUID) -> Note:
        result = await db.execute(
            select(Note).where(Note.id == note_uuid, Note.user_id == user_id)
        )
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_uuid))
        return note

    @staticmethod
    async def _load_tags(
        db: AsyncSession, user_id: uuid.UUID, tag_uuids: Sequence[uuid.UUID]
    ) -> List[Tag]:
        # Validation ran in other sessions; the note needs Tag rows from this one
        if not tag_uuids:
            return []
        result = await db.execute(
            select(Tag).where(Tag.id.in_(tag_uuids), Tag.user_id == user_id).order_by(Tag.name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _flush(db: AsyncSession, action: str, user_id: uuid.UUID) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error on note %s for user %s: %s", action, user_id, str(e))
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"action": action, "error_type": type(e).__name__},
            ) from e
