"""
Gallery-related Pydantic schemas.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from hestia.shared.schemas.common import BaseSchema


class GalleryAsset(BaseSchema):
    """A stored gallery image."""

    id: UUID
    artisan_id: UUID
    image_url: str
    storage_path: str
    title: str
    position: int
    is_featured: bool
    created_at: datetime


class FeatureRequest(BaseModel):
    """Request to feature or unfeature a gallery image."""

    is_featured: bool = Field(description="True to feature, False to unfeature")
