"""
Noteful API: Note Route Handlers
=================================

What:  /api/notes CRUD. Every route requires a bearer token; the token's user
       id scopes every query.
How:   Thin handlers: pull parameters, call NoteService, set status and
       headers. Errors are exceptions handled globally in noteful.main.

Ids arrive as plain strings (not `UUID` path params) so a malformed id is
reported as our 400 validation_error rather than FastAPI's 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.dependencies import get_current_user, get_note_service
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteListItem, NoteResponse, NoteWrite
from noteful.schemas.user import AuthUser
from noteful.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

AUTH_RESPONSES = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}


@router.get(
    "/notes",
    response_model=List[NoteListItem],
    responses={400: {"description": "Malformed folderId or tagId", "model": ErrorResponse}, **AUTH_RESPONSES},
    summary="List notes",
    description=(
        "Lists the caller's notes. `searchTerm` runs a full-text search and orders "
        "results by relevance; otherwise notes come back oldest first."
    ),
)
async def list_notes(
    search_term: str | None = Query(default=None, alias="searchTerm"),
    folder_id: str | None = Query(default=None, alias="folderId"),
    tag_id: str | None = Query(default=None, alias="tagId"),
    user: AuthUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteListItem]:
    return await notes.list_notes(
        db,
        user.id,
        search_term=search_term,
        folder_id=folder_id,
        tag_id=tag_id,
    )


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **AUTH_RESPONSES,
    },
    summary="Get a single note",
)
async def get_note(
    note_id: str,
    user: AuthUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await notes.get_note(db, user.id, note_id)


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing title or invalid folder/tag", "model": ErrorResponse},
        **AUTH_RESPONSES,
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteWrite,
    request: Request,
    response: Response,
    user: AuthUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await notes.create_note(db, user.id, payload)
    response.headers["Location"] = f"{request.url.path}/{note.id}"
    return note


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing title, malformed id, or invalid folder/tag", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **AUTH_RESPONSES,
    },
    summary="Replace a note",
)
async def update_note(
    note_id: str,
    payload: NoteWrite,
    user: AuthUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await notes.update_note(db, user.id, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses=AUTH_RESPONSES,
    summary="Delete a note",
    description="Idempotent: answers 204 whether or not the note existed.",
)
async def delete_note(
    note_id: str,
    user: AuthUser = Depends(get_current_user),
    notes: NoteService = Depends(get_note_service),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await notes.delete_note(db, user.id, note_id)
    return Response(status_code=204)
