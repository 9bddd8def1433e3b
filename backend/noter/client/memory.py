"""
Noter Client — In-Memory Store & Offline Client
===============================================

What:  A process-local note store and the NotesClient that uses it.
How:   InMemoryNoteStore keeps notes in an insertion-ordered dict and applies
       the same rules as the record handlers (noter.services.note_rules):
       same ids, same timestamps, same ValidationError / NotFoundError
       conditions. Each store is an explicitly created instance; tests and
       callers make as many isolated copies as they need.
Who:   create_notes_client() when no API base URL is configured, and
       RemoteNotesClient as its optional read fallback.
"""

import logging
from typing import Dict, Iterable, List, Optional

from noter.exceptions import NotFoundError
from noter.schemas.note import NoteResponse
from noter.services import note_rules

from noter.client.base import NotesClient

logger = logging.getLogger(__name__)

WELCOME_NOTES = (
    (
        "Welcome to Noter",
        "This is your first note! You can edit or delete this note, or create new ones.",
    ),
    (
        "How to use Noter",
        "Create, edit, and delete notes easily. Your notes will be stored in the cloud "
        "and accessible from anywhere.",
    ),
)


class InMemoryNoteStore:
    """
    Dict-backed note store with the record handlers' semantics.

    Every method returns fresh NoteResponse copies, so callers cannot change
    stored state by mutating what they received.
    """

    def __init__(self, notes: Optional[Iterable[NoteResponse]] = None):
        self._notes: Dict[str, NoteResponse] = {}
        for note in notes or ():
            self._notes[note.id] = note.model_copy()

    @classmethod
    def with_welcome_notes(cls) -> "InMemoryNoteStore":
        store = cls()
        for title, content in WELCOME_NOTES:
            store.create(title, content)
        return store

    def __len__(self) -> int:
        return len(self._notes)

    def _require(self, note_id: Optional[str]) -> NoteResponse:
        note_id = note_rules.require_note_id(note_id)
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    def list(self) -> List[NoteResponse]:
        return [note.model_copy() for note in self._notes.values()]

    def get(self, note_id: Optional[str]) -> NoteResponse:
        return self._require(note_id).model_copy()

    def create(self, title: Optional[str], content: Optional[str] = None) -> NoteResponse:
        title = note_rules.validate_new_title(title)
        timestamp = note_rules.utc_now_iso()
        note = NoteResponse(
            id=note_rules.new_note_id(),
            title=title,
            content=content or "",
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._notes[note.id] = note
        return note.model_copy()

    def update(
        self,
        note_id: Optional[str],
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> NoteResponse:
        current = self._require(note_id)
        changes = note_rules.validate_changes(title, content)
        changes["updated_at"] = note_rules.next_timestamp(current.updated_at)
        updated = current.model_copy(update=changes)
        self._notes[current.id] = updated
        return updated.model_copy()

    def delete(self, note_id: Optional[str]) -> None:
        note = self._require(note_id)
        del self._notes[note.id]


class InMemoryNotesClient(NotesClient):
    """NotesClient backed by an owned InMemoryNoteStore; no network."""

    def __init__(self, store: Optional[InMemoryNoteStore] = None):
        self.store = store if store is not None else InMemoryNoteStore()

    async def list_notes(self) -> List[NoteResponse]:
        return self.store.list()

    async def get_note(self, note_id: str) -> NoteResponse:
        return self.store.get(note_id)

    async def create_note(self, title: Optional[str], content: Optional[str] = None) -> NoteResponse:
        note = self.store.create(title, content)
        logger.debug("Offline note created: %s", note.id)
        return note

    async def update_note(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> NoteResponse:
        return self.store.update(note_id, title=title, content=content)

    async def delete_note(self, note_id: str) -> None:
        self.store.delete(note_id)
