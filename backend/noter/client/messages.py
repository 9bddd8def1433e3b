"""
Noter Client — User-Facing Failure Messages
===========================================

What:  Turns any error raised by a NotesClient into text a UI can display.
How:   ValidationError messages are written for users ("Title is required")
       and pass through; every other error becomes a generic message for
       the action that failed, so server faults and transport details never
       reach the screen.
"""

from noter.exceptions import ValidationError

FAILURE_MESSAGES = {
    "list": "Failed to fetch notes. Please try again later.",
    "get": "Failed to fetch note. Please try again later.",
    "save": "Failed to save note. Please try again later.",
    "delete": "Failed to delete note. Please try again later.",
}

DEFAULT_FAILURE = "Something went wrong. Please try again later."


def user_message(exc: BaseException, action: str) -> str:
    """
    Args:
        exc:    The error raised by the client call
        action: "list", "get", "save" (create or update), or "delete"
    """
    if isinstance(exc, ValidationError):
        return exc.message
    return FAILURE_MESSAGES.get(action, DEFAULT_FAILURE)
