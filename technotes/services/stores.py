"""
TechNotes Backend — Note and User Stores
==========================================

What:  Thin async persistence wrappers over an AsyncSession.
Why:   NoteService talks to these interfaces only, so its rules can be tested
       against in-memory fakes and the session stays an injected, per-request
       dependency.
How:   Each store holds the request's AsyncSession. Writes are flushed
       immediately (the commit happens in get_db_session) so constraint and
       connectivity failures surface inside the service call.

Error Handling:
    SQLAlchemy errors are logged with context and re-raised as DatabaseError
    (→ 500). Nothing is retried here.
"""

import logging
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.exceptions import DatabaseError
from technotes.models.note import Note, title_collation_key
from technotes.models.user import User

logger = logging.getLogger(__name__)


def _database_error(operation: str, exc: Exception, **context) -> DatabaseError:
    logger.error("Database error during %s: %s", operation, str(exc), exc_info=True)
    context["operation"] = operation
    context["error_type"] = type(exc).__name__
    return DatabaseError(context=context)


class UserStore:
    """Read-only access to users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_ids(self, user_ids: Iterable[UUID]) -> Dict[UUID, User]:
        """
        Fetch several users in one round trip.

        Returns a dict keyed by user id; ids with no matching user are absent.
        """
        ids = set(user_ids)
        if not ids:
            return {}
        try:
            result = await self.db.execute(select(User).where(User.id.in_(ids)))
        except SQLAlchemyError as e:
            raise _database_error("find_users", e, count=len(ids))
        return {user.id: user for user in result.scalars().all()}


class NoteStore:
    """CRUD access to notes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[Note]:
        # Creation order stands in for insertion order; id breaks timestamp ties
        try:
            result = await self.db.execute(select(Note).order_by(Note.created_at, Note.id))
        except SQLAlchemyError as e:
            raise _database_error("find_notes", e)
        return list(result.scalars().all())

    async def find_by_id(self, note_id: UUID) -> Optional[Note]:
        try:
            return await self.db.get(Note, note_id)
        except SQLAlchemyError as e:
            raise _database_error("find_note", e, note_id=str(note_id))

    async def find_by_title(self, title: str) -> Optional[Note]:
        """Find a note whose title equals `title`, ignoring case and accents."""
        query = select(Note).where(Note.title_key == title_collation_key(title)).limit(1)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise _database_error("find_note_by_title", e)
        return result.scalars().first()

    async def create(self, user_id: UUID, title: str, text: str) -> Optional[Note]:
        note = Note(user_id=user_id, title=title, text=text, completed=False)
        self.db.add(note)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise _database_error("create_note", e)
        return note

    async def save(self, note: Note) -> Note:
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise _database_error("save_note", e, note_id=str(note.id))
        return note

    async def delete(self, note: Note) -> None:
        try:
            await self.db.delete(note)
            await self.db.flush()
        except SQLAlchemyError as e:
            raise _database_error("delete_note", e, note_id=str(note.id))
