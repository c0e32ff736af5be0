"""
TechNotes Backend — Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteStore for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: Non-sequential, generated client side so it is known
      before the INSERT is flushed
    - user_id: Owner reference. Not a foreign key: users are managed by a
      separate service and a note may outlive its owner
    - title_key: Collation key of the title, kept in sync by a validator.
      Duplicate-title checks compare keys, so "Groceries", "GROCERIES" and
      "Gröceries" collide
    - created_at / updated_at: UTC with timezone

    Index on title_key is NOT unique. Uniqueness is enforced by the service
    with a check-then-write, which two concurrent writers can race past.
"""

import unicodedata
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Text, Uuid
from sqlalchemy import text as sa_text
from sqlalchemy.orm import Mapped, mapped_column, validates

from technotes.database import Base


def title_collation_key(title: str) -> str:
    """
    Fold a title to its comparison key: case and diacritics are ignored,
    base letters are preserved.

        >>> title_collation_key("Gröceries") == title_collation_key("GROCERIES")
        True
    """
    decomposed = unicodedata.normalize("NFKD", title)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A titled note owned by a user.

    Lifecycle:
        1. Created by NoteService.create_note (completed = False)
        2. Overwritten in place by NoteService.update_note
        3. Removed permanently by NoteService.delete_note
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        comment="ID of the owning user (reference, not enforced)",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title, unique under case/accent-insensitive comparison",
    )

    title_key: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Collation key of the title used for duplicate detection",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=sa_text("false"),
        comment="Whether the note has been marked done",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=sa_text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=sa_text("CURRENT_TIMESTAMP"),
        comment="When this note was last saved (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_title_key", "title_key"),
    )

    @validates("title")
    def _sync_title_key(self, key: str, value: str) -> str:
        self.title_key = title_collation_key(value)
        return value

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', completed={self.completed})>"
