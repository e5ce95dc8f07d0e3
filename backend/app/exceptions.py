"""
WoofPoint Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure the API can report.
Why:   Services raise domain errors; global handlers (main.py) translate each
       one into exactly one HTTP status and a structured JSON body.
How:   Each exception class carries a message, an optional context dict, and
       the machine-readable `error_code` used in the response.
Who:   Raised by services, the auth gate, and middleware.

Exception Hierarchy:
    WoofPointError (base)
    ├── ValidationError              → 400 Bad Request
    │   ├── FileTooLargeError        → 400 (upload exceeds size limit)
    │   └── UnsupportedMediaTypeError→ 400 (upload is not an image)
    ├── ConflictError                → 400 (duplicate email at signup)
    ├── UnauthorizedError            → 401 (missing credential / bad login)
    ├── ForbiddenError               → 403 (invalid or expired token, wrong role)
    ├── NotFoundError                → 404 Not Found
    ├── RateLimitExceededError       → 429 Too Many Requests
    ├── StorageError                 → 500 (object storage failure)
    └── DatabaseError                → 500 (persistence failure)
"""

from typing import Any, Dict, Optional


class WoofPointError(Exception):
    """
    Base exception for all WoofPoint application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 4xx details)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(WoofPointError):
    """
    Raised when client input fails validation.

    When:    Malformed identifier, missing upload, business-rule violation.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "validation_error"

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


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds `settings.max_photo_size`."""

    error_code = "payload_too_large"

    def __init__(self, max_size: int, actual_size: Optional[int] = None):
        max_mb = max_size / (1024 * 1024)
        ctx: Dict[str, Any] = {"max_size_mb": max_mb}
        if actual_size is not None:
            ctx["actual_size"] = actual_size
        super().__init__(
            message=f"File too large. Maximum size is {max_mb:.0f}MB.",
            field="profilePhoto",
            context=ctx,
        )


class UnsupportedMediaTypeError(ValidationError):
    """Uploaded file is not an image."""

    error_code = "unsupported_media_type"

    def __init__(self, content_type: Optional[str]):
        super().__init__(
            message="Only image files are allowed",
            field="profilePhoto",
            context={"content_type": content_type or "unknown"},
        )


class ConflictError(WoofPointError):
    """
    Raised when a create would violate a uniqueness rule.

    When:    Signup with an email that is already registered (any letter case).
    HTTP:    400 Bad Request (the public contract reports duplicates as 400)
    """

    status_code = 400
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(WoofPointError):
    """
    Raised when no usable credential was presented.

    When:    Missing/malformed Authorization header, wrong email or password.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "Access token required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(WoofPointError):
    """
    Raised when a credential was presented but cannot be honoured.

    When:    Bad signature, expired token, missing claims, or a role that
             does not own the requested resource.
    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(WoofPointError):
    """
    Raised when a referenced User, profile, trainer, or dog does not exist.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so routes never deal with status codes themselves.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(WoofPointError):
    """
    Raised when a client exceeds the per-IP limit on credential endpoints.

    HTTP:    429 Too Many Requests (with Retry-After header)
    """

    status_code = 429
    error_code = "rate_limit_exceeded"

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


class StorageError(WoofPointError):
    """
    Raised when the object store rejects an upload.

    HTTP:    500 Internal Server Error

    Signed-URL resolution never raises this; it fails soft to an empty string.
    """

    def __init__(
        self,
        message: str = "Failed to store the uploaded file. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(WoofPointError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; SQL details are
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
