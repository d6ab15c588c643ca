"""Create users, folders, tags, notes and notes_tags

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema. Every folder, tag and note row carries the owning
       user's id; (user_id, name) is unique for folders and tags.
Note:  The GIN full-text index is PostgreSQL only and must match
       noteful.models.note.FULLTEXT_DOCUMENT_SQL.

Rollback: downgrade() drops every table (all data is lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from noteful.models.note import FULLTEXT_DOCUMENT_SQL

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("fullname", sa.String(255), nullable=False, server_default=""),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    for table in ("folders", "tags"):
        op.create_table(
            table,
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column(
                "user_id",
                sa.Uuid(),
                sa.ForeignKey("users.id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", "name", name=f"uq_{table}_user_id_name"),
        )

    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "folder_id",
            sa.Uuid(),
            sa.ForeignKey("folders.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_user_id_created_at", "notes", ["user_id", "created_at"])

    op.create_table(
        "notes_tags",
        sa.Column(
            "note_id",
            sa.Uuid(),
            sa.ForeignKey("notes.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id",
            sa.Uuid(),
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index("idx_notes_tags_tag_id", "notes_tags", ["tag_id"])

    if op.get_bind().dialect.name == "postgresql":
        op.create_index(
            "idx_notes_fulltext",
            "notes",
            [sa.text(FULLTEXT_DOCUMENT_SQL)],
            postgresql_using="gin",
        )


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        op.drop_index("idx_notes_fulltext", table_name="notes")
    op.drop_index("idx_notes_tags_tag_id", table_name="notes_tags")
    op.drop_table("notes_tags")
    op.drop_index("idx_notes_user_id_created_at", table_name="notes")
    op.drop_table("notes")
    op.drop_table("tags")
    op.drop_table("folders")
    op.drop_table("users")
