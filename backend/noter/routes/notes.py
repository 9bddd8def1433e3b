"""
Noter Backend — Record Handlers
===============================

What:  The five note endpoints: list, get-by-id, create, update, delete.
How:   FastAPI parses the path and JSON body, the handler delegates to
       NoteService, and the global exception handlers in main.py turn
       ValidationError / NotFoundError / ServerFaultError into
       `{"error": <message>}` responses with 400 / 404 / 500.
Who:   Called by the client adapter (noter.client.RemoteNotesClient).

Route Inventory:
    GET    /notes        → 200 + array of notes
    GET    /notes/{id}   → 200 + note
    POST   /notes        → 201 + note
    PUT    /notes/{id}   → 200 + note
    DELETE /notes/{id}   → 204, no body
    GET/PUT/DELETE /notes/ → 400, "Note ID is required"

Each handler is independent of the others and keeps no state between
requests.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noter.database import get_db_session
from noter.exceptions import ValidationError
from noter.schemas.note import ErrorResponse, NoteCreate, NoteResponse, NoteUpdate
from noter.services import note_rules
from noter.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_bad_request = {400: {"description": "Malformed or incomplete request", "model": ErrorResponse}}
_not_found = {404: {"description": "Note not found", "model": ErrorResponse}}
_server_fault = {500: {"description": "Record store failure", "model": ErrorResponse}}


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={**_server_fault},
    summary="List all notes",
)
async def list_notes(db: AsyncSession = Depends(get_db_session)) -> List[NoteResponse]:
    """Full scan; an empty store returns `[]`."""
    return await note_service.list_notes(db)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_bad_request, **_not_found, **_server_fault},
    summary="Get a single note by ID",
)
async def get_note(note_id: str, db: AsyncSession = Depends(get_db_session)) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_bad_request, **_server_fault},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note from `{title, content?}`.

    The response carries the generated id and identical createdAt/updatedAt.
    """
    return await note_service.create_note(db, payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={**_bad_request, **_not_found, **_server_fault},
    summary="Update a note",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Merge `{title?, content?}` into an existing note.

    At least one field must be supplied; updatedAt is always refreshed.
    """
    return await note_service.update_note(db, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_bad_request, **_not_found, **_server_fault},
    summary="Delete a note",
)
async def delete_note(note_id: str, db: AsyncSession = Depends(get_db_session)) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.api_route(
    "/notes/",
    methods=["GET", "PUT", "DELETE"],
    responses={**_bad_request},
    include_in_schema=False,
)
async def note_id_missing() -> None:
    """An id-addressed call with the id left out of the path."""
    raise ValidationError(message=note_rules.ID_REQUIRED, field="id")
