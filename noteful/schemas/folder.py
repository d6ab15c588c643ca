"""Folder request/response schemas."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class FolderWrite(BaseModel):
    """Body of POST and PUT /api/folders. `name` is checked in the service."""
    name: Optional[str] = Field(default=None, description="Folder name, unique per user")


class FolderResponse(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}
