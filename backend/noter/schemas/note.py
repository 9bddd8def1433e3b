"""
Noter Backend — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract between the client and the
       record handlers.
How:   FastAPI validates request bodies against NoteCreate / NoteUpdate and
       serializes NoteResponse by alias, so the wire format uses camelCase
       (`createdAt`, `updatedAt`) while Python code uses snake_case.
Who:   Route handlers, NoteService, and the client adapter (which decodes
       responses into NoteResponse).

Presence rules live in the service layer, not here: both input models
accept every field as optional so that "title is required" and "at least
one field must be provided" produce the exact 400 messages of the contract.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a note.

    Returned by every handler except delete, and by every client call that
    yields a note.
    """
    id: str = Field(description="Unique note identifier (UUID4 text)")
    title: str = Field(description="Note title")
    content: str = Field(default="", description="Note body, may be empty")
    created_at: str = Field(
        alias="createdAt",
        description="When the note was created (ISO-8601 UTC)",
    )
    updated_at: str = Field(
        alias="updatedAt",
        description="When the note was last modified (ISO-8601 UTC)",
    )

    model_config = {"from_attributes": True, "populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends in bodies
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /notes.

    title is required by NoteService (truthiness check); content defaults to "".
    Unknown keys such as id or timestamps are ignored.
    """
    title: Optional[str] = Field(default=None, description="Note title (required)")
    content: Optional[str] = Field(default=None, description="Note body")


class NoteUpdate(BaseModel):
    """
    Body of PUT /notes/{id}: a partial field set.

    A field that is absent or null is "not supplied" and keeps its prior value.
    """
    title: Optional[str] = Field(default=None, description="New title (non-empty)")
    content: Optional[str] = Field(default=None, description="New body")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body returned with every 4xx/5xx status.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Record store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
