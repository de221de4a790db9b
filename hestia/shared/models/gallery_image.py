"""
GalleryImage Entity Model

One normalized image in an artisan's gallery.

SAMPLE GALLERY_IMAGE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 880e8400-e29b-41d4-a716-446655440000                      │
│ artisan_id       │ 770e8400-e29b-41d4-a716-446655440000                      │
│ image_url        │ "https://gallery-images.s3.../770e.../1735.webp"          │
│ storage_path     │ "770e8400-.../1735689600000-3f2a9c1b.webp"                │
│ title            │ "teapot.jpg"                                              │
│ position         │ 0                                                          │
│ is_featured      │ true                                                       │
└──────────────────────────────────────────────────────────────────────────────┘

Invariants:
===========
- position is the image count at insert time; deletes never renumber.
- At most MAX_FEATURED_IMAGES rows per artisan have is_featured = true.
  The repository enforces this with a conditional UPDATE.
"""

from typing import TYPE_CHECKING
import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hestia.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from hestia.shared.models.artisan import Artisan


class GalleryImage(Base, TimestampMixin):
    """
    GalleryImage model - a stored, normalized gallery image.

    Attributes:
        id: Unique identifier (UUID v4)
        artisan_id: Owning artisan profile
        image_url: Public URL of the stored object
        storage_path: Object key inside the gallery bucket
        title: Original filename or a generated label
        position: Display order
        is_featured: Shown first on cards and previews
    """

    __tablename__ = "gallery_images"
    __table_args__ = (
        # Serves the featured-count subquery of the cap check
        Index(
            "ix_gallery_images_artisan_featured",
            "artisan_id",
            postgresql_where=text("is_featured"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    artisan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("artisans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    storage_path: Mapped[str] = mapped_column(Text, nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_featured: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    artisan: Mapped["Artisan"] = relationship(
        "Artisan",
        back_populates="gallery_images",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<GalleryImage(id={self.id}, artisan_id={self.artisan_id}, position={self.position})>"
