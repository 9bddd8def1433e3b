"""
Noter Backend — Note Rules
==========================

What:  The field rules and clock every note writer shares: id generation,
       ISO-8601 timestamps, and the create/update validation checks.
Who:   NoteService (record handlers) and InMemoryNoteStore (offline client),
       so both raise the same ValidationError messages for the same input.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from noter.exceptions import ValidationError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

TITLE_REQUIRED = "Title is required"
TITLE_EMPTY = "Title cannot be empty"
ID_REQUIRED = "Note ID is required"
NOTHING_TO_UPDATE = "At least one field (title or content) must be provided for update"


def new_note_id() -> str:
    return str(uuid.uuid4())


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def utc_now_iso() -> str:
    """Current UTC time, e.g. 2024-01-15T12:00:00.123456Z."""
    return format_timestamp(datetime.now(timezone.utc))


def next_timestamp(previous: Optional[str]) -> str:
    """
    A fresh updated-at value strictly later than `previous`.

    If the clock has not moved past `previous` (same microsecond, or a
    skewed writer), the result is `previous` plus one microsecond.
    """
    now = datetime.now(timezone.utc)
    if previous:
        try:
            last = datetime.strptime(previous, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            return format_timestamp(now)
        if now <= last:
            now = last + timedelta(microseconds=1)
    return format_timestamp(now)


def require_note_id(note_id: Optional[str]) -> str:
    if not note_id:
        raise ValidationError(message=ID_REQUIRED, field="id")
    return note_id


def validate_new_title(title: Optional[str]) -> str:
    """
    Create-time title check.

    Truthiness only: "" and None are rejected, "   " is accepted.
    """
    if not title:
        raise ValidationError(message=TITLE_REQUIRED, field="title")
    return title


def validate_changes(title: Optional[str], content: Optional[str]) -> dict:
    """
    Update-time check of a partial field set.

    None means "not supplied". Returns the supplied fields.
    """
    if title is None and content is None:
        raise ValidationError(message=NOTHING_TO_UPDATE)
    changes = {}
    if title is not None:
        if not title:
            raise ValidationError(message=TITLE_EMPTY, field="title")
        changes["title"] = title
    if content is not None:
        changes["content"] = content
    return changes
