"""
TechNotes Backend — Notes Route Handlers
==========================================

What:  GET / POST / PATCH / DELETE on /notes.
Why:   The notes resource is addressed as a collection; the note id travels
       in the JSON body for PATCH and DELETE.
How:   Parses the body, delegates to NoteService, returns JSON.
Who:   Called by the frontend notes list and note editor.

These routes sit behind upstream authentication; no identity check is
performed here.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.database import get_db_session
from technotes.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreateRequest,
    NoteDeleteRequest,
    NoteUpdateRequest,
    NoteView,
)
from technotes.services.note_service import NoteService
from technotes.services.stores import NoteStore, UserStore

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/notes", tags=["Notes"])


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    """Build a NoteService bound to this request's database session."""
    return NoteService(notes=NoteStore(db), users=UserStore(db))


@router.get(
    "",
    response_model=List[NoteView],
    responses={
        200: {"description": "All notes with owner usernames"},
        400: {"description": "No notes found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes",
)
async def get_all_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteView]:
    """
    Return every note with its owner's username.

    An empty collection is reported as 400 "No notes found".
    """
    return await service.list_notes()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields or invalid data", "model": ErrorResponse},
        409: {"description": "Duplicate note title", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_new_note(
    payload: NoteCreateRequest,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    return await service.create_note(
        user=payload.user,
        title=payload.title,
        text=payload.text,
    )


@router.patch(
    "",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing fields or note not found", "model": ErrorResponse},
        409: {"description": "Duplicate note title", "model": ErrorResponse},
    },
    summary="Update a note",
)
async def update_note(
    payload: NoteUpdateRequest,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    return await service.update_note(
        id=payload.id,
        user=payload.user,
        title=payload.title,
        text=payload.text,
        completed=payload.completed,
    )


@router.delete(
    "",
    response_model=str,
    responses={
        200: {"description": "Confirmation text naming the deleted note"},
        400: {"description": "Missing id or note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    payload: NoteDeleteRequest,
    service: NoteService = Depends(get_note_service),
) -> str:
    """
    Delete a note by id.

    The body is a bare JSON string, e.g.
    "Note titled \\"Shopping\\" with ID 3f2b... deleted".
    """
    return await service.delete_note(id=payload.id)
