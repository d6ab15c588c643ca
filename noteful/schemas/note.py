"""
Noteful API: Note Request/Response Schemas
===========================================

What:  The JSON shape of notes on the wire.
Why:   The API uses camelCase keys (`folderId`, `createdAt`) and never exposes
       `user_id`; the ORM model uses snake_case and carries the owner.

Required-field checks (non-empty title) live in NoteService rather than in
these models so a missing title is reported the same way whether the key is
absent, null or an empty string.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from noteful.schemas.tag import TagResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Ids are accepted as plain strings; the reference validators decide
    whether they point at something the caller owns.
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[str] = Field(
        default=None,
        alias="folderId",
        description="Folder to file the note under; empty or null for none",
    )
    tags: Optional[List[str]] = Field(default=None, description="Tag ids to attach")

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════

def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class NoteResponse(BaseModel):
    """Full representation of a note, tags expanded to {id, name}."""
    id: uuid.UUID = Field(description="Unique note identifier")
    title: str
    content: Optional[str] = None
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC)")
    folder_id: Optional[uuid.UUID] = Field(default=None, alias="folderId")
    tags: List[TagResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True, "populate_by_name": True}

    @classmethod
    def from_note(cls, note, **extra) -> "NoteResponse":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            created_at=_as_utc(note.created_at),
            folder_id=note.folder_id,
            tags=[TagResponse.model_validate(tag) for tag in note.tags],
            **extra,
        )


class NoteListItem(NoteResponse):
    """
    A note as returned by GET /api/notes.

    `score` is the full-text relevance when the request carried a searchTerm
    and null otherwise.
    """
    score: Optional[float] = Field(default=None, description="Search relevance")
