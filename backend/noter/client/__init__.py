"""
Noter Client — Client API Adapter
=================================

What:  Async adapter that turns UI actions into note record operations.

Usage:
    from noter.client import create_notes_client, user_message

    async with create_notes_client() as client:
        try:
            notes = await client.list_notes()
        except Exception as exc:
            show(user_message(exc, "list"))
"""

from noter.client.base import NotesClient
from noter.client.factory import create_notes_client
from noter.client.memory import InMemoryNoteStore, InMemoryNotesClient
from noter.client.messages import user_message
from noter.client.remote import RemoteNotesClient

__all__ = [
    "NotesClient",
    "InMemoryNoteStore",
    "InMemoryNotesClient",
    "RemoteNotesClient",
    "create_notes_client",
    "user_message",
]
