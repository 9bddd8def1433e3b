"""
Noter Backend — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the note CRUD contract.
How:   Each exception class carries a user-safe message and an optional
       context dict. Global exception handlers (registered in main.py) turn
       them into `{"error": <message>}` responses with the right status
       code; the client raises the same classes when it decodes responses.
Who:   Raised by services and the client adapter; caught by global handlers
       and by UI callers.

Exception Hierarchy:
    NoterError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── ServerFaultError  → 500 Internal Server Error
    └── TransportError    → client only: no response was received

None of these are retried by the handler or by the client.
"""

from typing import Any, Dict, Optional


class NoterError(Exception):
    """
    Base exception for all Noter application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoterError):
    """
    Raised when client input fails validation (BadRequest).

    When:    Missing/unparsable body, missing note id, missing or empty
             title on create, empty update payload.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NoterError):
    """
    Raised when an id-addressed operation targets a record that does not exist.

    When:    GET/PUT/DELETE /notes/{id} with an unknown id.
    HTTP:    404 Not Found

    The message is always "Note not found" for notes; the id goes to context.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(
            message=message or f"{resource.capitalize()} not found",
            context=ctx,
        )
        self.resource_id = resource_id


class ServerFaultError(NoterError):
    """
    Raised when the record store or runtime fails unexpectedly.

    When:    Connection lost mid-query, constraint violation, any failure
             below the service layer.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    error type is kept in context and logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TransportError(NoterError):
    """
    Raised by the client when a request never produced an HTTP response.

    When:    DNS failure, refused connection, timeout, TLS error.
    HTTP:    none; the UI surfaces it as a generic failure.
    """

    def __init__(
        self,
        message: str = "The notes service could not be reached",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
