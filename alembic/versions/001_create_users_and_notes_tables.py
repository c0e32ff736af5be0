"""Create users and notes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `users` and `notes` tables.
How:   notes.user_id references users by value only (no foreign key); the
       title_key index backs duplicate-title lookups and is NOT unique.

Rollback: downgrade() drops both tables (destructive: all data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Unique identifier",
        ),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="ID of the owning user (reference, not enforced)",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Note title, unique under case/accent-insensitive comparison",
        ),
        sa.Column(
            "title_key",
            sa.Text(),
            nullable=False,
            comment="Collation key of the title used for duplicate detection",
        ),
        sa.Column("text", sa.Text(), nullable=False, comment="Note body"),
        sa.Column(
            "completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
            comment="Whether the note has been marked done",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was last saved (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("ix_notes_user_id", "notes", ["user_id"])
    # Not unique: duplicate titles are rejected by the service, not the database
    op.create_index("idx_notes_title_key", "notes", ["title_key"])


def downgrade() -> None:
    op.drop_index("idx_notes_title_key", table_name="notes")
    op.drop_index("ix_notes_user_id", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
