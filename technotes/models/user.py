"""
TechNotes Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table.
Why:   Notes are listed together with their owner's username.
Who:   Read by UserStore. Users are created and managed elsewhere; this
       service never writes to the table.
"""

import uuid

from sqlalchemy import Boolean, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from technotes.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
