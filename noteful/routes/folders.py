"""
Noteful API: Folder Route Handlers
==================================

/api/folders CRUD, scoped to the token's user.
Deleting a folder keeps its notes and clears their folderId.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.dependencies import get_current_user
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderResponse, FolderWrite
from noteful.schemas.user import AuthUser
from noteful.services.folder_service import folder_service

router = APIRouter(prefix="/api", tags=["Folders"])

NOT_FOUND = {404: {"description": "Folder not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Missing name or malformed id", "model": ErrorResponse}}
CONFLICT = {409: {"description": "Name already used by this user", "model": ErrorResponse}}


@router.get("/folders", response_model=List[FolderResponse], summary="List folders by name")
async def list_folders(
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    rows = await folder_service.list(db, user.id)
    return [FolderResponse.model_validate(row) for row in rows]


@router.get(
    "/folders/{folder_id}",
    response_model=FolderResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Get a single folder",
)
async def get_folder(
    folder_id: str,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return FolderResponse.model_validate(await folder_service.get(db, user.id, folder_id))


@router.post(
    "/folders",
    status_code=201,
    response_model=FolderResponse,
    responses={**BAD_REQUEST, **CONFLICT},
    summary="Create a folder",
)
async def create_folder(
    payload: FolderWrite,
    request: Request,
    response: Response,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    row = await folder_service.create(db, user.id, payload.name)
    response.headers["Location"] = f"{request.url.path}/{row.id}"
    return FolderResponse.model_validate(row)


@router.put(
    "/folders/{folder_id}",
    response_model=FolderResponse,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT},
    summary="Rename a folder",
)
async def update_folder(
    folder_id: str,
    payload: FolderWrite,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    row = await folder_service.update(db, user.id, folder_id, payload.name)
    return FolderResponse.model_validate(row)


@router.delete(
    "/folders/{folder_id}",
    status_code=204,
    summary="Delete a folder",
    description="Idempotent: answers 204 whether or not the folder existed.",
)
async def delete_folder(
    folder_id: str,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.delete(db, user.id, folder_id)
    return Response(status_code=204)
