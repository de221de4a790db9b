"""
Artisan draft Pydantic schemas.

Partial Updates:
================
``DraftUpdate`` distinguishes three states per field through pydantic's
``model_fields_set``:

    DraftUpdate()                       → bio absent, left untouched
    DraftUpdate(bio=None)               → bio explicitly cleared
    DraftUpdate(bio="Hand-thrown...")   → bio written

Parsing a JSON body behaves the same way: only keys present in the payload
end up in ``model_fields_set``.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from hestia.shared.models.enums import ArtisanStatus, ContactChannel
from hestia.shared.schemas.common import BaseSchema


# Contact fields where an explicit empty string is stored as NULL
CONTACT_FIELDS = (
    "contact_value",
    "email",
    "phone",
    "instagram",
    "whatsapp_url",
    "telegram",
    "external_shop_url",
)


class DraftUpdate(BaseModel):
    """Partial write to an artisan draft. Only fields that are set are written."""

    display_name: Optional[str] = Field(None, max_length=120, description="Name shown on the profile")
    category: Optional[str] = Field(None, max_length=100, description="Primary craft category")
    bio: Optional[str] = Field(None, description="Short bio (100-500 characters to publish)")
    location: Optional[str] = Field(None, max_length=100, description="Neighbourhood")
    contact_channel: Optional[ContactChannel] = None
    contact_value: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    instagram: Optional[str] = Field(None, max_length=64)
    whatsapp_url: Optional[str] = Field(None, max_length=255)
    telegram: Optional[str] = Field(None, max_length=64)
    external_shop_url: Optional[str] = Field(None, max_length=255)
    accepting_orders: Optional[bool] = None
    hours: Optional[dict[str, Any]] = None
    tags: Optional[list[str]] = None

    def present_fields(self) -> dict[str, Any]:
        """Field → value for every field present in the payload."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class DraftProfile(BaseSchema):
    """Full read of an artisan draft, display name included."""

    id: UUID
    user_id: UUID
    status: ArtisanStatus
    display_name: Optional[str] = None
    category: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    contact_channel: ContactChannel = ContactChannel.INSTAGRAM
    contact_value: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    instagram: Optional[str] = None
    whatsapp_url: Optional[str] = None
    telegram: Optional[str] = None
    external_shop_url: Optional[str] = None
    accepting_orders: bool = False
    hours: Optional[dict[str, Any]] = None
    tags: list[str] = Field(default_factory=list)
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class DraftCreatedResponse(BaseModel):
    """Response after ensuring a draft exists."""

    id: UUID


class PublishResult(BaseModel):
    """
    Outcome of a publish attempt.

    Either ``success=True`` with the artisan id, or ``success=False`` with
    every failed check in ``errors``.
    """

    success: bool
    artisan_id: Optional[UUID] = None
    errors: list[str] = Field(default_factory=list)


class OnboardingOptions(BaseModel):
    """Choices and limits the wizard renders."""

    categories: list[str]
    locations: list[str]
    max_featured_images: int
    min_gallery_images: int
    bio_min_length: int
    bio_max_length: int
