"""
Profile Entity Model

The base profile every signed-in user has, artisan or not.

The wizard's "display name" lives here rather than on the artisan record,
so it is denormalized into the draft on read and written back on update.

SAMPLE PROFILE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000 (the user id)        │
│ full_name        │ "Mei Lin Tan"                                             │
│ role             │ "community_member"                                        │
│ created_at       │ 2025-01-01T00:00:00Z                                      │
│ updated_at       │ 2025-01-15T10:30:00Z                                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Enum as SQLEnum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hestia.shared.models.base import Base, TimestampMixin
from hestia.shared.models.enums import ProfileRole, enum_values


if TYPE_CHECKING:
    from hestia.shared.models.artisan import Artisan


class Profile(Base, TimestampMixin):
    """
    Base profile of a user.

    Attributes:
        id: The user's id (assigned by the identity provider, not generated)
        full_name: Display name shown on cards and the artisan page
        role: community_member until a profile is published, then artisan

    Relationships:
        artisan: The user's artisan profile, if one was ever created
    """

    __tablename__ = "profiles"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    full_name: Mapped[Optional[str]] = mapped_column(
        String(120),
        nullable=True,
    )

    role: Mapped[ProfileRole] = mapped_column(
        SQLEnum(ProfileRole, name="profilerole", values_callable=enum_values),
        default=ProfileRole.COMMUNITY_MEMBER,
        nullable=False,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    # One-to-One: at most one artisan record per user
    artisan: Mapped[Optional["Artisan"]] = relationship(
        "Artisan",
        back_populates="profile",
        uselist=False,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Profile(id={self.id}, role={self.role})>"
