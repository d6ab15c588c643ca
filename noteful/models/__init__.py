"""
Noteful API: ORM Models
========================

Importing this package registers every mapper on `Base.metadata`, which is
what `Database.create_all` and Alembic's autogenerate rely on.
"""

from noteful.models.folder import Folder
from noteful.models.note import Note, notes_tags
from noteful.models.tag import Tag
from noteful.models.user import User

__all__ = ["Folder", "Note", "Tag", "User", "notes_tags"]
