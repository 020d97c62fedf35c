"""
SDLC Demo API — Custom Exception Hierarchy
===========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message, an HTTP status and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return the shared JSON error envelope.
Who:   Raised by services, routes and middleware; caught by global handlers.

Exception Hierarchy:
    DemoAPIError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── SimulatedError           → 500 Internal Server Error (/api/error)
    ├── ConfigurationError       → raised at construction, never served
    └── RecordingError           → swallowed by the request recorder

Error envelope (every error response):
    {
        "error": {
            "message": "Task not found",
            "status": 404,
            "timestamp": "2024-01-15T12:00:00.000Z"
        }
    }
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DemoAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        status_code:  HTTP status the global handler responds with
        context:      Additional debug info (logged but NOT returned to client)
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


class ValidationError(DemoAPIError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, unknown task status or priority.
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


class ForbiddenError(DemoAPIError):
    """Operation is disabled in the current environment. HTTP 403."""

    status_code = 403

    def __init__(
        self,
        message: str = "This operation is not allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DemoAPIError):
    """
    Raised when a requested resource does not exist.

    The message keeps the short "<Resource> not found" form API clients
    already match on (e.g. "User not found").
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class SimulatedError(DemoAPIError):
    """Deliberate failure used by monitoring drills (GET /api/error)."""

    status_code = 500

    def __init__(
        self,
        message: str = "This is a simulated error for testing purposes",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(DemoAPIError):
    """
    Raised when a component is constructed with invalid settings.

    When:    Non-positive rate-limit window or quota, non-positive log capacity.
    Effect:  The component refuses to initialize; app creation fails.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RecordingError(DemoAPIError):
    """
    Raised when a request record cannot be built (malformed values).

    Never reaches the client: the recorder logs it and drops the record.
    """

    def __init__(
        self,
        message: str = "Malformed request record",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def utc_timestamp() -> str:
    """ISO 8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_content(message: str, status_code: int, stack: Optional[str] = None) -> Dict[str, Any]:
    """Build the JSON error envelope shared by every error response."""
    body: Dict[str, Any] = {
        "message": message,
        "status": status_code,
        "timestamp": utc_timestamp(),
    }
    if stack:
        body["stack"] = stack
    return {"error": body}
