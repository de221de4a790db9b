"""
Hestia SQLAlchemy Models

This package contains all database models for the Hestia application.

Model Hierarchy:
================
    Profile
       └── artisan (Artisan, 0..1)
              └── gallery_images (GalleryImage[])

Models Overview:
================
- Base: Base class and timestamp mixin
- Profile: Base profile of every user (display name, role)
- Artisan: Artisan profile (draft / published / unpublished)
- GalleryImage: Normalized gallery image attached to an artisan

Usage:
======
    from hestia.shared.models import Artisan, GalleryImage, Profile
"""

from hestia.shared.models.base import Base, TimestampMixin
from hestia.shared.models.enums import (
    ProfileRole,
    ArtisanStatus,
    ContactChannel,
)
from hestia.shared.models.profile import Profile
from hestia.shared.models.artisan import Artisan
from hestia.shared.models.gallery_image import GalleryImage

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "ProfileRole",
    "ArtisanStatus",
    "ContactChannel",
    # Core models
    "Profile",
    "Artisan",
    "GalleryImage",
]
