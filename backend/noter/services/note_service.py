"""
Noter Backend — Note Service (Record Operations)
================================================

What:  Business logic behind the five record handlers: list, get, create,
       update, delete.
How:   Each method validates its input, performs exactly one read or write
       against the record store through the request's AsyncSession, and
       returns the affected note as a NoteResponse.
Who:   Called by route handlers in noter.routes.notes.
When:  Once per request; the service keeps no state between calls.

Validation order (shared by every method):
    1. Missing identifier             → ValidationError   (400)
    2. Id-addressed record is absent  → NotFoundError     (404)
    3. Missing / empty fields          → ValidationError   (400)
    4. Store raised anything else     → ServerFaultError  (500)

Every write is committed here, inside the error mapping, so a failed
commit surfaces as ServerFaultError before any response is produced.

Concurrent updates to the same note are last-writer-wins; there is no
version check.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from noter.exceptions import NoterError, NotFoundError, ServerFaultError
from noter.models.note import Note
from noter.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noter.services import note_rules

logger = logging.getLogger(__name__)


class NoteService:
    """
    Record operations for notes.

    Error Handling Strategy:
        Application exceptions (ValidationError, NotFoundError) propagate
        unchanged. Anything raised by SQLAlchemy or the driver is logged
        with its type and wrapped in ServerFaultError, whose client-facing
        message is generic.
    """

    @contextmanager
    def _store_errors(self, operation: str, note_id: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except NoterError:
            raise
        except Exception as e:
            logger.error(
                "Record store error during %s (note=%s): %s",
                operation,
                note_id,
                str(e),
                exc_info=True,
            )
            raise ServerFaultError(
                context={
                    "operation": operation,
                    "note_id": note_id,
                    "original_error": type(e).__name__,
                },
            ) from e

    async def _load(self, db: AsyncSession, note_id: str) -> Note:
        note = await db.get(Note, note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Full scan of the record store.

        Returns:
            Every note, oldest first (ties broken by id). An empty store
            yields an empty list, never an error.
        """
        with self._store_errors("list"):
            result = await db.execute(select(Note).order_by(Note.created_at, Note.id))
            notes = result.scalars().all()
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: Optional[str]) -> NoteResponse:
        """
        Single key lookup.

        Raises:
            ValidationError: note_id is empty
            NotFoundError: no record for note_id
            ServerFaultError: the lookup itself failed
        """
        note_id = note_rules.require_note_id(note_id)
        with self._store_errors("get", note_id):
            note = await self._load(db, note_id)
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert a new note.

        The id is a fresh UUID4 and both timestamps are the same instant.
        Missing content is stored as "".

        Raises:
            ValidationError: title absent or empty
            ServerFaultError: the insert failed
        """
        title = note_rules.validate_new_title(payload.title)
        timestamp = note_rules.utc_now_iso()
        note = Note(
            id=note_rules.new_note_id(),
            title=title,
            content=payload.content or "",
            created_at=timestamp,
            updated_at=timestamp,
        )
        with self._store_errors("create", note.id):
            db.add(note)
            await db.flush()
            await db.commit()
        logger.info("Note created: %s", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: Optional[str],
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Merge a partial field set into an existing note.

        Unspecified fields keep their values; updated_at is always refreshed
        and is strictly later than before.

        Raises:
            ValidationError: missing id, or (for an existing note) empty
                payload or empty title
            NotFoundError: no record for note_id, checked before the fields
            ServerFaultError: the read or write failed
        """
        note_id = note_rules.require_note_id(note_id)

        with self._store_errors("update", note_id):
            note = await self._load(db, note_id)
            changes = note_rules.validate_changes(payload.title, payload.content)
            for field, value in changes.items():
                setattr(note, field, value)
            note.updated_at = note_rules.next_timestamp(note.updated_at)
            await db.flush()
            await db.commit()

        logger.info("Note updated: %s (%s)", note_id, ", ".join(sorted(changes)))
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: Optional[str]) -> None:
        """
        Hard-delete an existing note.

        Raises:
            ValidationError: note_id is empty
            NotFoundError: no record for note_id
            ServerFaultError: the read or delete failed
        """
        note_id = note_rules.require_note_id(note_id)
        with self._store_errors("delete", note_id):
            note = await self._load(db, note_id)
            await db.delete(note)
            await db.flush()
            await db.commit()
        logger.info("Note deleted: %s", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService holds no state; the per-request session is passed in
note_service = NoteService()
