"""
ReserBot Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the two failure tiers of the API.
Why:   Services raise, a single set of global handlers (main.py) maps each type
       to its HTTP status and payload. Routes never catch exceptions themselves.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    ReservasError (base)              → 500 Internal Server Error
    ├── ValidationError               → 400 Bad Request (caller can fix)
    ├── RecordStoreError              → 400 Bad Request (store rejected the call)
    │   └── StoreConnectionError      → 400 Bad Request (connectivity probe)
    ├── StoreConfigurationError       → 500 Internal Server Error
    └── RouteNotFoundError            → 404 Not Found

Store-reported errors are deliberately in the caller-input tier: the store
rejects requests for the same reasons the validator does (bad values), and
the API does not try to tell the two apart.
"""

from typing import Any, Dict, Optional

# Body of every 500 response; the real cause only goes to the log
INTERNAL_ERROR_MESSAGE = "internal server error"


class ReservasError(Exception):
    """
    Base exception for all ReserBot application errors.

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


class ValidationError(ReservasError):
    """
    Raised when reservation input fails a business rule.

    HTTP: 400 Bad Request, body `{"error": message}`.
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


class RecordStoreError(ReservasError):
    """
    Raised when the record store answers a request with an error.

    What:    The store was reachable and replied, but refused the operation
             (constraint violation, bad column value, bad credentials, ...).
    HTTP:    400 Bad Request with the store's own message.

    Transport failures (DNS, refused connection, malformed payload) are NOT
    wrapped in this class; they surface as internal failures.
    """

    def __init__(
        self,
        message: str = "The record store rejected the request",
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if code:
            ctx["code"] = code
        super().__init__(message=message, context=ctx)
        self.code = code


class StoreConnectionError(RecordStoreError):
    """
    Raised by the connectivity probe when the store reports an error.

    HTTP: 400 Bad Request, body `{"error": message, "details": details}`.
    """

    def __init__(
        self,
        details: str,
        message: str = "record store connection error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details


class StoreConfigurationError(ReservasError):
    """
    Raised on every store call when the store connection settings are missing.

    HTTP: 500 Internal Server Error (generic message, details logged).
    """

    def __init__(
        self,
        message: str = "The record store is not configured",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RouteNotFoundError(ReservasError):
    """
    Raised when no route (or no static file) matches the request.

    HTTP: 404 Not Found, body `{"error": "route not found"}`.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message="route not found", context=ctx)
