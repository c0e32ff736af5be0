"""
TechNotes Backend — Note Service (Business Logic)
===================================================

What:  The four note operations: list, create, update, delete.
Why:   Encapsulates validation and duplicate-title rules, independent of HTTP.
How:   Composes a NoteStore and a UserStore, both injected per request.
Who:   Called by the /notes route handlers.

Request Flow (every operation):
    ┌──────────┐    ┌────────────┐    ┌─────────────┐    ┌──────────┐
    │  Parse   │───▶│  Validate  │───▶│  Query      │───▶│  Mutate  │
    │  (Route) │    │  fields    │    │  store(s)   │    │  & reply │
    └──────────┘    └────────────┘    └─────────────┘    └──────────┘

    Each step may exit early with ValidationError / NotFoundError (400) or
    ConflictError (409). Store failures arrive as DatabaseError (500).

Duplicate Titles:
    Titles are unique under case/accent-insensitive comparison. The check is
    a lookup followed by a write, not a store constraint, so two concurrent
    writers with the same title can both succeed.
"""

import logging
from typing import Any, List, Optional
from uuid import UUID

from technotes.exceptions import ConflictError, NotFoundError, ValidationError
from technotes.schemas.note import MessageResponse, NoteView
from technotes.services.stores import NoteStore, UserStore

logger = logging.getLogger(__name__)


def _parse_id(value: Any) -> Optional[UUID]:
    """Parse a client-supplied id; malformed ids yield None."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  Every note, projected with its owner's username
        - create_note(): Validate, reject duplicate titles, insert
        - update_note(): Validate, locate, reject duplicate titles, overwrite
        - delete_note(): Validate, locate, remove
    """

    def __init__(self, notes: NoteStore, users: UserStore):
        self.notes = notes
        self.users = users

    async def list_notes(self) -> List[NoteView]:
        """
        Return every note with the owning user's username attached.

        Owners are resolved in one batched lookup and matched back in note
        order. A note whose owner no longer exists gets `username=None`.

        Raises:
            NotFoundError: There are no notes at all (→ 400)
        """
        notes = await self.notes.find_all()
        if not notes:
            raise NotFoundError(message="No notes found")

        owners = await self.users.find_by_ids(note.user_id for note in notes)

        views = []
        for note in notes:
            owner = owners.get(note.user_id)
            views.append(
                NoteView(
                    id=note.id,
                    user=note.user_id,
                    title=note.title,
                    text=note.text,
                    completed=note.completed,
                    created_at=note.created_at,
                    updated_at=note.updated_at,
                    username=owner.username if owner is not None else None,
                )
            )
        return views

    async def create_note(self, user: Any, title: Any, text: Any) -> MessageResponse:
        """
        Create a note owned by `user`.

        Raises:
            ValidationError: A field is missing, or `user` is not a valid id
            ConflictError:   Another note already has this title
        """
        if not user or not title or not text:
            raise ValidationError(message="All fields are required")

        user_id = _parse_id(user)
        if user_id is None:
            raise ValidationError(message="Invalid note data received", field="user")

        duplicate = await self.notes.find_by_title(title)
        if duplicate is not None:
            logger.info("Rejected new note: title %r collides with note %s", title, duplicate.id)
            raise ConflictError(context={"duplicate_id": str(duplicate.id)})

        note = await self.notes.create(user_id=user_id, title=title, text=text)
        if note is None:
            raise ValidationError(message="Invalid note data received")

        logger.info("Note created: %s (user=%s)", note.id, user_id)
        return MessageResponse(message="New note created")

    async def update_note(
        self,
        id: Any,
        user: Any,
        title: Any,
        text: Any,
        completed: Any,
    ) -> MessageResponse:
        """
        Overwrite an existing note's owner, title, text and completion flag.

        `completed` must be an actual boolean; truthy values are rejected.
        Keeping the note's own title (in any casing) is not a conflict.

        Raises:
            ValidationError: A field is missing or `completed` is not a bool
            NotFoundError:   No note has this id (→ 400)
            ConflictError:   A different note already has this title
        """
        if not id or not user or not title or not text or not isinstance(completed, bool):
            raise ValidationError(message="All fields are required")

        note_id = _parse_id(id)
        note = await self.notes.find_by_id(note_id) if note_id is not None else None
        if note is None:
            raise NotFoundError(message="Note not found", resource_id=str(id))

        user_id = _parse_id(user)
        if user_id is None:
            raise ValidationError(message="Invalid note data received", field="user")

        duplicate = await self.notes.find_by_title(title)
        if duplicate is not None and duplicate.id != note.id:
            logger.info("Rejected update of %s: title %r collides with note %s",
                        note.id, title, duplicate.id)
            raise ConflictError(context={"duplicate_id": str(duplicate.id)})

        note.user_id = user_id
        note.title = title
        note.text = text
        note.completed = completed
        updated = await self.notes.save(note)

        logger.info("Note updated: %s", updated.id)
        return MessageResponse(message=f'"{updated.title}" updated')

    async def delete_note(self, id: Any) -> str:
        """
        Permanently remove a note.

        Returns:
            Confirmation text naming the deleted note's title and id

        Raises:
            ValidationError: No id was given
            NotFoundError:   No note has this id (→ 400)
        """
        if not id:
            raise ValidationError(message="Note ID required", field="id")

        note_id = _parse_id(id)
        note = await self.notes.find_by_id(note_id) if note_id is not None else None
        if note is None:
            raise NotFoundError(message="Note not found", resource_id=str(id))

        title, deleted_id = note.title, note.id
        await self.notes.delete(note)

        logger.info("Note deleted: %s", deleted_id)
        return f'Note titled "{title}" with ID {deleted_id} deleted'
