"""
Artisan Entity Model

The artisan profile a user builds through the onboarding wizard. It starts
life as a draft, becomes publicly visible once published, and can later be
unpublished.

Model Hierarchy:
================
    Profile (1) ── (0..1) Artisan
                             └── gallery_images (GalleryImage[])

SAMPLE ARTISAN RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 770e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ status           │ "draft"                                                   │
│ craft_type       │ "Pottery & Ceramics"                                      │
│ bio              │ "Wheel-thrown stoneware fired in a small gas kiln..."     │
│ location         │ "Tiong Bahru"                                             │
│ contact_channel  │ "instagram"                                               │
│ instagram        │ "@meilin.clay"                                            │
│ accepting_orders │ true                                                      │
│ tags             │ ["stoneware", "tableware"]                                │
│ published_at     │ null                                                      │
└──────────────────────────────────────────────────────────────────────────────┘

Invariants:
===========
- user_id is UNIQUE: a user has no artisan record or exactly one.
- Creation is lazy (first persisted write) and idempotent; the unique
  constraint is what makes concurrent creation safe.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hestia.shared.models.base import Base, TimestampMixin
from hestia.shared.models.enums import ArtisanStatus, ContactChannel, enum_values


if TYPE_CHECKING:
    from hestia.shared.models.profile import Profile
    from hestia.shared.models.gallery_image import GalleryImage


class Artisan(Base, TimestampMixin):
    """
    Artisan profile (draft, published or unpublished).

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Owning user (unique)
        status: Visibility lifecycle state
        craft_type: Primary craft category
        bio: Short bio shown on the profile
        location: Neighbourhood the artisan works from
        contact_channel: Preferred contact channel selector
        contact_value: Value for the preferred channel
        email / phone / instagram / whatsapp_url / telegram / external_shop_url:
            Individual contact channels
        accepting_orders: Whether the artisan takes orders right now
        hours: Free-form opening hours
        tags: Free-form tags
        published_at: When the profile last went live
    """

    __tablename__ = "artisans"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY & OWNER
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    status: Mapped[ArtisanStatus] = mapped_column(
        SQLEnum(ArtisanStatus, name="artisanstatus", values_callable=enum_values),
        default=ArtisanStatus.DRAFT,
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # BASICS
    # ═══════════════════════════════════════════════════════════════════════════

    craft_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTACT
    # ═══════════════════════════════════════════════════════════════════════════

    contact_channel: Mapped[ContactChannel] = mapped_column(
        SQLEnum(ContactChannel, name="contactchannel", values_callable=enum_values),
        default=ContactChannel.INSTAGRAM,
        nullable=False,
    )

    contact_value: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    instagram: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    whatsapp_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    telegram: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    external_shop_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # AVAILABILITY
    # ═══════════════════════════════════════════════════════════════════════════

    accepting_orders: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    hours: Mapped[Optional[dict[str, Any]]] = mapped_column(nullable=True)

    tags: Mapped[list[str]] = mapped_column(default=list, nullable=False)

    # ═══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ═══════════════════════════════════════════════════════════════════════════

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    profile: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="artisan",
    )

    gallery_images: Mapped[list["GalleryImage"]] = relationship(
        "GalleryImage",
        back_populates="artisan",
        cascade="all, delete-orphan",
        order_by="GalleryImage.position",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Artisan(id={self.id}, user_id={self.user_id}, status={self.status})>"
