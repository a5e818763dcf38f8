"""
ETTU Backend — Custom Exception Hierarchy
===========================================

What:  The errors ETTU code raises on purpose, one class per HTTP outcome.
How:   Each carries a client-safe `message` and a `context` dict of extra
       detail. register_exception_handlers() in main.py turns them into
       {"error", "message", "details", "request_id"} bodies.
Who:   Raised by the database layer, dependencies and middleware; caught by global handlers.

Exception Hierarchy:
    EttuError (base)                  → 500 Internal Server Error
    ├── ValidationError               → 400 Bad Request (client can fix)
    ├── FeatureDisabledError          → 403 Forbidden (feature flag off)
    ├── NotFoundError                 → 404 Not Found
    ├── RateLimitExceededError        → 429 Too Many Requests
    ├── DatabaseUnavailableError      → 503 Service Unavailable (database-less mode)
    └── DatabaseError                 → 500 Internal Server Error

    ConfigError (separate root)       → never reaches HTTP; aborts startup
"""

from typing import Any, Dict, Optional


class ConfigError(Exception):
    """
    Raised when configuration cannot be loaded.

    What:    A hard setting (PORT, pool bounds) is unparsable or inconsistent.
    When:    Only while building Settings at startup.
    Why separate root: This is not a request-time error; there is no HTTP
             response to produce. The process should exit.
    """


class EttuError(Exception):
    """
    Base exception for all ETTU application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only partially returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EttuError):
    """
    Raised when client input fails business validation.

    HTTP:    400 Bad Request
    Note:    Pydantic schema validation still answers 422 through FastAPI;
             this covers checks made by our own code (e.g., malformed UUIDs).
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


class FeatureDisabledError(EttuError):
    """
    Raised when a route belongs to a feature switched off by configuration.

    HTTP:    403 Forbidden
    When:    GUEST_MODE, REGISTRATION_ENABLED or PUBLIC_SNIPPETS is false.
    """

    def __init__(self, feature: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["feature"] = feature
        super().__init__(message=f"The '{feature}' feature is disabled", context=ctx)
        self.feature = feature


class NotFoundError(EttuError):
    """
    Raised when a lookup by id finds nothing (project, note, snippet...).

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(EttuError):
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
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseUnavailableError(EttuError):
    """
    Raised when a handler needs the database but the server runs without one.

    What:    Startup could not connect, so the app is in database-less mode.
    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "The database is not available. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(EttuError):
    """
    Raised when a query or commit fails for reasons the client cannot fix.

    HTTP:    500 Internal Server Error
    Note:
        The message returned to the client is always generic. Driver errors,
        SQL text and constraint names are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
