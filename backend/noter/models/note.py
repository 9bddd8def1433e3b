"""
Noter Backend — Note SQLAlchemy Model
=====================================

What:  ORM model representing the `notes` table in the record store.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: UUID4 text, primary key, assigned by the service at creation
    - title / content: TEXT; content defaults to ''
    - created_at / updated_at: ISO-8601 UTC strings
      (YYYY-MM-DDTHH:MM:SS.ffffffZ), so string order is time order on every
      backend, SQLite included
"""

from sqlalchemy import Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from noter.database import Base


class Note(Base):
    """
    A persisted note record, addressed by `id`.

    Lifecycle:
        1. Created by NoteService.create_note (both timestamps identical)
        2. Mutated only by NoteService.update_note (title/content, updated_at)
        3. Hard-deleted by NoteService.delete_note
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Opaque unique identifier (UUID4 text), immutable",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title, non-empty",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
        comment="Note body, may be empty",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Invariant: created_at <= updated_at
    created_at: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="When this note was created (ISO-8601 UTC)",
    )

    updated_at: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="When this note was last modified (ISO-8601 UTC)",
    )

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"
