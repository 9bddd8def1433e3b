"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `notes` table holding note records keyed by id.
How:   Portable column types only (String/Text), so the same revision runs
       on PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (destructive, all notes lost).
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
    """Create the notes table and its created_at index (see noter/models/note.py)."""
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Opaque unique identifier (UUID4 text), immutable",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Note title, non-empty",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Note body, may be empty",
        ),
        # ISO-8601 UTC strings; created_at <= updated_at
        sa.Column(
            "created_at",
            sa.String(32),
            nullable=False,
            comment="When this note was created (ISO-8601 UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.String(32),
            nullable=False,
            comment="When this note was last modified (ISO-8601 UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # List handler scans in created_at order
    op.create_index("idx_notes_created_at", "notes", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
