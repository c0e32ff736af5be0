"""
TechNotes Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
Why:   Automatic serialization and OpenAPI doc generation.
Who:   Used by route handlers as body/return types, by NoteService for NoteView.

Request models are deliberately lenient: every field is optional so that
a missing field reaches NoteService, which answers with the 400
"All fields are required" message clients expect instead of a 422.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes."""
    user: Optional[str] = Field(default=None, description="ID of the owning user")
    title: Optional[str] = Field(default=None, description="Note title")
    text: Optional[str] = Field(default=None, description="Note body")


class NoteUpdateRequest(BaseModel):
    """
    Body of PATCH /notes.

    `completed` is typed Any so that "true", 1 and friends are not coerced
    into a boolean; NoteService rejects anything that is not a JSON boolean.
    """
    id: Optional[str] = Field(default=None, description="ID of the note to update")
    user: Optional[str] = Field(default=None, description="ID of the owning user")
    title: Optional[str] = Field(default=None, description="New title")
    text: Optional[str] = Field(default=None, description="New body")
    completed: Any = Field(default=None, description="Completion flag (JSON boolean)")


class NoteDeleteRequest(BaseModel):
    """Body of DELETE /notes."""
    id: Optional[str] = Field(default=None, description="ID of the note to delete")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteView(BaseModel):
    """
    What:  A note projected together with its owner's username.
    Who:   Returned as array items by GET /notes.

    `username` is null when the owning user no longer exists.
    """
    id: uuid.UUID = Field(description="Unique note identifier")
    user: uuid.UUID = Field(description="ID of the owning user")
    title: str = Field(description="Note title")
    text: str = Field(description="Note body")
    completed: bool = Field(description="Whether the note is done")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")
    username: Optional[str] = Field(default=None, description="Owner's username")


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by create and update."""
    message: str = Field(description="Human-readable result message")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Duplicate note title",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
