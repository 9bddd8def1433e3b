"""
Noter Client — Strategy Selection
=================================

What:  Builds the NotesClient the application uses for its whole lifetime.
How:   Reads Settings once:
           api_base_url set    → RemoteNotesClient (optionally with an
                                 offline read fallback)
           api_base_url unset  → InMemoryNotesClient
Who:   Application startup code; tests pass their own Settings and store.
"""

import logging
from typing import Optional

from noter.config import Settings, settings as default_settings

from noter.client.base import NotesClient
from noter.client.memory import InMemoryNoteStore, InMemoryNotesClient
from noter.client.remote import RemoteNotesClient

logger = logging.getLogger(__name__)


def _offline_store(config: Settings) -> InMemoryNoteStore:
    if config.offline_seed_notes:
        return InMemoryNoteStore.with_welcome_notes()
    return InMemoryNoteStore()


def create_notes_client(
    config: Optional[Settings] = None,
    *,
    store: Optional[InMemoryNoteStore] = None,
) -> NotesClient:
    """
    Select the client strategy from configuration.

    Args:
        config: Settings to read (defaults to the process settings)
        store:  In-memory store to use instead of a freshly built one, for
                the offline client or the remote client's fallback
    """
    config = config or default_settings

    if config.api_base_url:
        fallback = None
        if config.offline_fallback:
            fallback = InMemoryNotesClient(store if store is not None else _offline_store(config))
        logger.info(
            "Notes client: remote %s (offline fallback %s)",
            config.api_base_url,
            "on" if fallback else "off",
        )
        return RemoteNotesClient(
            config.api_base_url,
            timeout=config.client_timeout,
            fallback=fallback,
        )

    logger.info("Notes client: in-memory store (no API base URL configured)")
    return InMemoryNotesClient(store if store is not None else _offline_store(config))
