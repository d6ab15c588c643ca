"""Tag request/response schemas."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class TagWrite(BaseModel):
    """Body of POST and PUT /api/tags. `name` is checked in the service."""
    name: Optional[str] = Field(default=None, description="Tag name, unique per user")


class TagResponse(BaseModel):
    id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}
