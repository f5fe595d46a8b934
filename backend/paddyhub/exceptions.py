"""
PaddyHub Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the two failure families the API
       knows about: bad client input and store failures.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, request parsing and middleware.

Exception Hierarchy:
    PaddyHubError (base)
    ├── ValidationError        → 400 Bad Request (client can fix)
    ├── PayloadTooLargeError   → 413 Payload Too Large
    └── StoreError             → 500 by default, status set per raise

Connection-level failures are not modelled separately; they surface as a
StoreError from whichever operation first touched the database. Nothing is
retried.
"""

from typing import Any, Dict, Optional


class PaddyHubError(Exception):
    """
    Base exception for all PaddyHub application errors.

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


class ValidationError(PaddyHubError):
    """
    Raised when client input fails validation.

    When:    Non-array history/logs, empty scan body, un-coercible stock field,
             undecodable JSON.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "history and logs must be arrays",
            "details": {"field": "history"}
        }
    """

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


class PayloadTooLargeError(PaddyHubError):
    """Request body above the configured size limit. HTTP 413."""

    def __init__(self, limit: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["limit"] = limit
        super().__init__(
            message=f"Request body exceeds the {limit} byte limit",
            context=ctx,
        )
        self.limit = limit


class StoreError(PaddyHubError):
    """
    Raised when a document store operation fails.

    Attributes:
        status_code:  HTTP status to answer with (500 unless the route says
                      otherwise; stock creation reports store failures as 400)
        passthrough:  Return the underlying error text to the client under
                      details.reason instead of keeping it server-side
        reason:       Text of the underlying error

    Security Note:
        Only routes that historically exposed the driver's message set
        passthrough. Everything else answers with the generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        reason: Optional[str] = None,
        status_code: int = 500,
        passthrough: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.reason = reason
        self.status_code = status_code
        self.passthrough = passthrough
