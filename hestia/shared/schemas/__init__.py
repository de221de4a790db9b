"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schemas, error responses, health
- artisan: Draft read / partial update, publish result, wizard options
- gallery: Gallery assets and featuring

Usage:
======
    from hestia.shared.schemas.artisan import DraftUpdate, DraftProfile, PublishResult
    from hestia.shared.schemas.common import ErrorResponse
"""

from hestia.shared.schemas.common import (
    BaseSchema,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from hestia.shared.schemas.artisan import (
    CONTACT_FIELDS,
    DraftUpdate,
    DraftProfile,
    DraftCreatedResponse,
    PublishResult,
    OnboardingOptions,
)
from hestia.shared.schemas.gallery import (
    GalleryAsset,
    FeatureRequest,
)

__all__ = [
    # Common
    "BaseSchema",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Artisan
    "CONTACT_FIELDS",
    "DraftUpdate",
    "DraftProfile",
    "DraftCreatedResponse",
    "PublishResult",
    "OnboardingOptions",
    # Gallery
    "GalleryAsset",
    "FeatureRequest",
]
