"""
TechNotes Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and stores; caught by global handlers.

Exception Hierarchy:
    TechNotesError (base)
    ├── ValidationError   → 400 Bad Request (missing or malformed fields)
    ├── NotFoundError     → 400 Bad Request (kept at 400 for client compatibility)
    ├── ConflictError     → 409 Conflict (duplicate note title)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TechNotesError(Exception):
    """
    Base exception for all TechNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TechNotesError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, non-boolean `completed`, malformed ids.
    HTTP:    400 Bad Request

    Request bodies are parsed leniently and checked in the service layer,
    so a missing field produces this 400 rather than FastAPI's 422.
    """

    def __init__(
        self,
        message: str = "All fields are required",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TechNotesError):
    """
    Raised when a requested note does not exist, or there are no notes at all.

    HTTP:    400 Bad Request. Existing clients branch on 400 + message text
             for these cases, so the status is not 404.
    """

    def __init__(
        self,
        message: str = "Note not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(TechNotesError):
    """
    Raised when a note title collides with an existing note's title.

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Duplicate note title",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TechNotesError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
