"""
Noteful API: Tag Route Handlers
===============================

/api/tags CRUD, scoped to the token's user.
Deleting a tag removes it from every note that carried it.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.dependencies import get_current_user
from noteful.schemas.common import ErrorResponse
from noteful.schemas.tag import TagResponse, TagWrite
from noteful.schemas.user import AuthUser
from noteful.services.tag_service import tag_service

router = APIRouter(prefix="/api", tags=["Tags"])

NOT_FOUND = {404: {"description": "Tag not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Missing name or malformed id", "model": ErrorResponse}}
CONFLICT = {409: {"description": "Name already used by this user", "model": ErrorResponse}}


@router.get("/tags", response_model=List[TagResponse], summary="List tags by name")
async def list_tags(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[TagResponse]:
    rows = await tag_service.list(db, user.id)
    return [TagResponse.model_validate(row) for row in rows]


@router.get(
    "/tags/{tag_id}",
    response_model=TagResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Get a single tag",
)
async def get_tag(
    tag_id: str,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return TagResponse.model_validate(await tag_service.get(db, user.id, tag_id))


@router.post(
    "/tags",
    status_code=201,
    response_model=TagResponse,
    responses={**BAD_REQUEST, **CONFLICT},
    summary="Create a tag",
)
async def create_tag(
    payload: TagWrite,
    request: Request,
    response: Response,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    row = await tag_service.create(db, user.id, payload.name)
    response.headers["Location"] = f"{request.url.path}/{row.id}"
    return TagResponse.model_validate(row)


@router.put(
    "/tags/{tag_id}",
    response_model=TagResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
    summary="Rename a tag",
)
async def update_tag(
    tag_id: str,
    payload: TagWrite,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    row = await tag_service.update(db, user.id, tag_id, payload.name)
    return TagResponse.model_validate(row)


@router.delete(
    "/tags/{tag_id}",
    status_code=204,
    summary="Delete a tag",
    description="Idempotent: answers 204 whether or not the tag existed.",
)
async def delete_tag(
    tag_id: str,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await tag_service.delete(db, user.id, tag_id)
    return Response(status_code=204)
