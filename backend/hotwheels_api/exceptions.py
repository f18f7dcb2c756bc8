"""
HotWheels API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the catalog read path.
Why:   The service layer reports "nothing found" and "database failed" as
       typed exceptions; the dispatcher turns them into HTTP responses so
       the services stay free of HTTP concerns.
How:   Each exception carries a client-safe message and an optional context
       dict. The context is logged, never returned to the client.

Exception Hierarchy:
    HotWheelsAPIError (base)
    ├── NotFoundError   → 404 {"error": message}   (expected, not a fault)
    └── DatabaseError   → 500 plain text           (unexpected fault)
"""

from typing import Any, Dict, Optional


class HotWheelsAPIError(Exception):
    """
    Base exception for all HotWheels API errors.

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


class NotFoundError(HotWheelsAPIError):
    """
    Raised when a catalog query returns nothing.

    When:    GET /all-models against an empty table, or /modelo/<id> for an
             identifier that matches no row.
    HTTP:    404 Not Found, body {"error": message}

    The message is written for the end user (the catalog is Spanish-language,
    so are its messages) and may include the requested identifier verbatim.
    """

    def __init__(
        self,
        message: str = "Recurso no encontrado.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(HotWheelsAPIError):
    """
    Raised when a catalog query fails to execute.

    HTTP:    500 Internal Server Error (generic plain-text body)

    The original driver exception is chained (`raise ... from exc`) and the
    query context is logged server-side only; table names and SQL never
    reach the client.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
