"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in Hestia.
It includes the declarative base and the timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Portability:
============
Columns use the generic ``Uuid`` and ``JSON`` types so the same models run on
PostgreSQL in production (native UUID, JSONB) and on SQLite in the test suite.

Usage:
======
    from hestia.shared.models.base import Base, TimestampMixin

    class GalleryImage(Base, TimestampMixin):
        __tablename__ = "gallery_images"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# JSON everywhere, JSONB when running on PostgreSQL
PortableJSON = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """Timezone-aware current time, used for application-side timestamps."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Maps Python ``dict`` / ``list`` annotations to the portable JSON type so
    models can declare ``Mapped[list[str]]`` without repeating the column type.
    """

    type_annotation_map = {
        dict[str, Any]: PortableJSON,
        list[str]: PortableJSON,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Provides two timestamp columns that are automatically managed:
    - created_at: Set by the database when the record is first inserted
    - updated_at: Set on INSERT, refreshed by SQLAlchemy on every UPDATE

    Example values:
        created_at: 2025-03-01T10:30:00Z (when the draft was first saved)
        updated_at: 2025-03-02T14:45:30Z (last autosave)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )
