"""
Noteful API: Note Model
========================

What:  ORM model for the `notes` table and the `notes_tags` association table.
Who:   Used by NoteService for owner-scoped CRUD and by Alembic.

Table Design:
    - folder_id is nullable: a note does not have to live in a folder.
      Deleting a folder clears it (SET NULL) instead of deleting notes.
    - tags are a many-to-many through `notes_tags`; deleting a tag removes
      its association rows.
    - user_id is on every row; every query filters on it.
    - created_at is assigned by the server in UTC and drives default ordering.

Indexes:
    idx_notes_user_id_created_at: the default listing (one user's notes by
    creation time).
    idx_notes_fulltext: PostgreSQL GIN index over the English tsvector of
    title + content, backing the searchTerm filter. Emitted only on PostgreSQL.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.tag import Tag

notes_tags = Table(
    "notes_tags",
    Base.metadata,
    Column("note_id", Uuid, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_notes_tags_tag_id", "tag_id"),
)

# Must stay identical to noteful.services.search.search_document() or
# PostgreSQL will not use the index for searchTerm queries.
FULLTEXT_DOCUMENT_SQL = (
    "to_tsvector('english', coalesce(title, '') || ' ' || coalesce(content, ''))"
)


class Note(Base):
    """
    A user's note.

    Lifecycle:
        Created by POST /api/notes, fully replaced by PUT, removed by DELETE.
        Title is required at the API layer; content may be empty.
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(String(500), nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    folder_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # selectin: tags load in the same await as the note, which async
    # sessions require (no lazy loading on attribute access)
    tags: Mapped[List[Tag]] = relationship(
        Tag,
        secondary=notes_tags,
        lazy="selectin",
        order_by=Tag.name,
    )

    __table_args__ = (
        Index("idx_notes_user_id_created_at", "user_id", "created_at"),
        Index(
            "idx_notes_fulltext",
            text(FULLTEXT_DOCUMENT_SQL),
            postgresql_using="gin",
        ).ddl_if(dialect="postgresql"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
