"""
Birdhouse Backend - Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios the API surfaces.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    BirdhouseError (base)       → 500 Internal Server Error
    ├── NotFoundError           → 404 Not Found
    └── DatabaseError           → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class BirdhouseError(Exception):
    """
    Base exception for all Birdhouse application errors.

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


class NotFoundError(BirdhouseError):
    """
    Raised when a lookup by identifier yields no record.

    HTTP:    404 Not Found, body {"error": "<Resource> not found"}

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so routes never branch on lookup results.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(BirdhouseError):
    """
    Raised when a database operation fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the SQL error is
    kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
