"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from hestia.shared.core.logging import get_logger
    from hestia.shared.core.exceptions import HestiaException, NotFoundError

    logger = get_logger(__name__)
    logger.info("draft_loaded", user_id=str(user_id))
"""

from hestia.shared.core.logging import (
    logger,
    get_logger,
    log_context,
)
from hestia.shared.core.exceptions import (
    HestiaException,
    AuthenticationError,
    NotFoundError,
    DraftNotFoundError,
    GalleryImageNotFoundError,
    ValidationError,
    InvalidCropError,
    ValidationFailedError,
    ConflictError,
    FeaturedLimitExceededError,
    CreationFailedError,
    UploadFailedError,
    StorageError,
    AutosaveFailedError,
    ImageProcessingError,
    DecodeFailedError,
    RenderUnavailableError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    # Exceptions
    "HestiaException",
    "AuthenticationError",
    "NotFoundError",
    "DraftNotFoundError",
    "GalleryImageNotFoundError",
    "ValidationError",
    "InvalidCropError",
    "ValidationFailedError",
    "ConflictError",
    "FeaturedLimitExceededError",
    "CreationFailedError",
    "UploadFailedError",
    "StorageError",
    "AutosaveFailedError",
    "ImageProcessingError",
    "DecodeFailedError",
    "RenderUnavailableError",
]
