"""
Profile Repository

Database operations specific to the Profile model.

Common Operations:
==================
- get_or_create()   → Base profile for a user, created on first use
- set_full_name()   → Write the display name
- set_role()        → Promote / demote the user's role
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hestia.shared.repositories.base import BaseRepository
from hestia.shared.models.enums import ProfileRole
from hestia.shared.models.profile import Profile


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Profile, session)

    async def get_or_create(self, user_id: UUID) -> Profile:
        """
        Get the base profile for ``user_id``, inserting an empty one if missing.

        Raises:
            sqlalchemy.exc.IntegrityError: If a concurrent transaction inserted
                the same profile first
        """
        profile = await self.get(user_id)
        if profile:
            return profile
        return await self.create(id=user_id, role=ProfileRole.COMMUNITY_MEMBER)

    async def set_full_name(self, user_id: UUID, full_name: Optional[str]) -> Profile:
        """Write the display name, creating the base profile if needed."""
        profile = await self.get_or_create(user_id)
        profile.full_name = full_name
        await self.session.flush()
        return profile

    async def set_role(self, user_id: UUID, role: ProfileRole) -> Profile:
        """Set the user's role, creating the base profile if needed."""
        profile = await self.get_or_create(user_id)
        profile.role = role
        await self.session.flush()
        return profile
