"""
Enums used across the application.
"""

from enum import Enum


class ProfileRole(str, Enum):
    """Role of a user in the directory."""

    COMMUNITY_MEMBER = "community_member"
    ARTISAN = "artisan"
    ADMIN = "admin"


class ArtisanStatus(str, Enum):
    """
    Visibility lifecycle of an artisan profile.

    DRAFT → PUBLISHED on a successful publish.
    PUBLISHED → UNPUBLISHED when the artisan hides the profile.
    """

    DRAFT = "draft"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"


class ContactChannel(str, Enum):
    """Preferred way for the community to reach an artisan."""

    EMAIL = "email"
    PHONE = "phone"
    INSTAGRAM = "instagram"
    WHATSAPP = "whatsapp"
    TELEGRAM = "telegram"
    WEBSITE = "website"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum values (not member names) in SQL enum columns."""
    return [member.value for member in enum_cls]
