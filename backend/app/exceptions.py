"""
Writing Submissions Backend — Custom Exception Hierarchy
=========================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       JSON responses of the form {"error": "<message>"}.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    WritingAppError (base)          → 500 Internal Server Error
    ├── AuthenticationError         → 401 Unauthorized
    ├── NotFoundError               → 404 Not Found
    ├── DatabaseError               → 500 Internal Server Error
    └── RateLimitExceededError      → 429 Too Many Requests

The `message` attribute is the only part that reaches the client.
`context` is logged server-side and never serialized into a response.
"""

from typing import Any, Dict, Optional


class WritingAppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationError(WritingAppError):
    """
    Raised when a request carries no valid session token.

    When:    Missing cookie/header, bad signature, expired token, no userId claim.
    HTTP:    401 Unauthorized

    The client always sees the same "Unauthorized" message. The concrete
    reason goes into context["reason"] for the server log.
    """

    def __init__(
        self,
        reason: str = "missing_token",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["reason"] = reason
        super().__init__(message="Unauthorized", context=ctx)
        self.reason = reason


class NotFoundError(WritingAppError):
    """
    Raised when a requested resource does not exist for the caller.

    When:    GET /api/writing/{id} with an unknown id, or an id owned by
             another user. Both cases look identical from the outside.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Not found", context=ctx)


class DatabaseError(WritingAppError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost, timeout, query error.
    HTTP:    500 Internal Server Error

    Security Note:
        The message is chosen by the service and is always generic
        (e.g. "Failed to fetch submissions"). Driver errors, SQL text and
        constraint names stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(WritingAppError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
