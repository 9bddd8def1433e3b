"""
Noter Client — Abstract Notes Client Interface
==============================================

What:  The contract every client strategy implements: one async method per
       CRUD action.
How:   RemoteNotesClient talks HTTP to the record handlers;
       InMemoryNotesClient works against an owned InMemoryNoteStore. The
       strategy is picked once at startup by create_notes_client().
Who:   UI views (or any other caller) hold a NotesClient and never check
       which strategy they got.

Contract:
    - Every mutating call is one round trip; nothing is retried.
    - Failures are raised as noter.exceptions types: ValidationError,
      NotFoundError, ServerFaultError, TransportError.
    - Returned notes are copies; the client is a view, not a source of truth.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from noter.schemas.note import NoteResponse


class NotesClient(ABC):
    """Async adapter between UI actions and the note record handlers."""

    @abstractmethod
    async def list_notes(self) -> List[NoteResponse]:
        """
        Every note, in store order. No pagination.

        Raises:
            ServerFaultError / TransportError: the caller must surface these
            to the user without crashing.
        """
        ...

    @abstractmethod
    async def get_note(self, note_id: str) -> NoteResponse:
        """
        Raises:
            NotFoundError: the store has no record for note_id
        """
        ...

    @abstractmethod
    async def create_note(self, title: Optional[str], content: Optional[str] = None) -> NoteResponse:
        """
        Returns the new note with its generated id and timestamps.

        Raises:
            ValidationError: title is None or empty
        """
        ...

    @abstractmethod
    async def update_note(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> NoteResponse:
        """
        Returns the merged note with a refreshed updatedAt.

        Raises:
            ValidationError: neither field supplied, or title supplied empty
            NotFoundError: the store has no record for note_id
        """
        ...

    @abstractmethod
    async def delete_note(self, note_id: str) -> None:
        """
        Raises:
            NotFoundError: the store has no record for note_id
        """
        ...

    async def aclose(self) -> None:
        """Release any transport resources. No-op by default."""

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
