"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    HestiaException (base)
       │
       ├── AuthenticationError (401)            ← Caller not identified
       ├── NotFoundError (404)                  ← Resource not found
       │      ├── DraftNotFoundError
       │      └── GalleryImageNotFoundError
       ├── ValidationError (400)                ← Invalid input data
       │      └── InvalidCropError
       ├── ValidationFailedError (422)          ← Publish gate failed (aggregated)
       ├── ConflictError (409)                  ← Resource state conflict
       │      └── FeaturedLimitExceededError
       ├── CreationFailedError (503)            ← Draft could not be created
       ├── UploadFailedError (502)              ← One gallery upload failed
       ├── StorageError (502)                   ← Object storage call failed
       ├── AutosaveFailedError (500)            ← Logged only, never surfaced
       └── ImageProcessingError                 ← Crop step cannot proceed
              ├── DecodeFailedError (422)
              └── RenderUnavailableError (500)

Propagation Policy:
===================
Transient failures (autosave, a single upload) are recovered where they
happen and never halt the wider workflow. Structural failures (draft
creation, publish) halt only the action that triggered them.

Usage:
======
    from hestia.shared.core.exceptions import FeaturedLimitExceededError

    raise FeaturedLimitExceededError(limit=3)
    # Results in: {"error": {"code": "FEATURED_LIMIT_EXCEEDED", "message": "...", "details": {"limit": 3}}}
"""

from typing import Any, Optional


class HestiaException(Exception):
    """
    Base exception for all Hestia application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION ERRORS (401)
# ═══════════════════════════════════════════════════════════════════════════════


class AuthenticationError(HestiaException):
    """
    Caller could not be identified (401 Unauthorized).

    Raised when the upstream identity header is missing or malformed.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(HestiaException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Draft", draft_id)
        # Message: "Draft with id 'abc-123' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


class DraftNotFoundError(NotFoundError):
    """Artisan draft not found error."""

    def __init__(self, draft_id: Optional[str] = None) -> None:
        super().__init__(resource="Draft", resource_id=draft_id)


class GalleryImageNotFoundError(NotFoundError):
    """Gallery image not found error."""

    def __init__(self, asset_id: str) -> None:
        super().__init__(resource="Gallery image", resource_id=asset_id)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409, 422)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(HestiaException):
    """
    Validation error (400 Bad Request).

    Raised when input data fails validation.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class InvalidCropError(ValidationError):
    """Crop rectangle is empty or falls outside the source image."""


class ValidationFailedError(HestiaException):
    """
    Publish attempted with incomplete data (422).

    Carries every failed check, not just the first one.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            message="Please complete all required fields",
            status_code=422,
            error_code="VALIDATION_FAILED",
            details={"errors": self.errors},
        )


class ConflictError(HestiaException):
    """
    Resource conflict error (409 Conflict).

    Raised when operation conflicts with existing resource state.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
        error_code: str = "CONFLICT",
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code=error_code,
            details=details,
        )


class FeaturedLimitExceededError(ConflictError):
    """Attempted to feature more gallery images than the cap allows."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            message=f"You can feature up to {limit} images",
            details={"limit": limit},
            error_code="FEATURED_LIMIT_EXCEEDED",
        )


# ═══════════════════════════════════════════════════════════════════════════════
# LIFECYCLE ERRORS (500, 502, 503)
# ═══════════════════════════════════════════════════════════════════════════════


class CreationFailedError(HestiaException):
    """
    Draft could not be created (503).

    Backing store unreachable or a constraint violation that a re-fetch
    could not resolve. The action that triggered creation aborts.
    """

    def __init__(
        self,
        message: str = "Failed to create artisan profile",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=503,
            error_code="CREATION_FAILED",
            details=details,
        )


class UploadFailedError(HestiaException):
    """A single gallery upload failed; reported with the filename."""

    def __init__(
        self,
        filename: Optional[str],
        reason: str = "Failed to upload image",
    ) -> None:
        self.filename = filename
        message = f"{filename}: {reason}" if filename else reason
        super().__init__(
            message=message,
            status_code=502,
            error_code="UPLOAD_FAILED",
            details={"filename": filename, "reason": reason},
        )


class AutosaveFailedError(HestiaException):
    """Background autosave write failed. Logged, never shown to the user."""

    def __init__(self, draft_id: str, reason: str) -> None:
        super().__init__(
            message=f"Autosave failed for draft '{draft_id}'",
            status_code=500,
            error_code="AUTOSAVE_FAILED",
            details={"draft_id": draft_id, "reason": reason},
        )


class StorageError(HestiaException):
    """Object storage call failed (502). Callers decide whether it is fatal."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        super().__init__(
            message=f"Storage {operation} failed for '{key}'",
            status_code=502,
            error_code="STORAGE_ERROR",
            details={"operation": operation, "key": key, "reason": reason},
        )


# ═══════════════════════════════════════════════════════════════════════════════
# IMAGE PROCESSING ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class ImageProcessingError(HestiaException):
    """Base for failures of the crop step. The queue stays on the current file."""


class DecodeFailedError(ImageProcessingError):
    """The source bytes could not be decoded as an image (422)."""

    def __init__(self, reason: str = "Image could not be decoded") -> None:
        super().__init__(
            message=reason,
            status_code=422,
            error_code="DECODE_FAILED",
        )


class RenderUnavailableError(ImageProcessingError):
    """The encoder for the target format is unavailable or failed (500)."""

    def __init__(self, reason: str = "Image encoder unavailable") -> None:
        super().__init__(
            message=reason,
            status_code=500,
            error_code="RENDER_UNAVAILABLE",
        )
