"""Profile repository - database operations for client/contractor profiles"""

from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.models.profile import Profile, ProfileType


class ProfileRepository:
    """Repository for profile database operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_client_for_update(self, profile_id: int) -> Optional[Profile]:
        """Get a client profile with its row locked until the transaction ends"""
        result = await self.session.execute(
            select(Profile)
            .where(Profile.id == profile_id, Profile.type == ProfileType.CLIENT.value)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def lock_many(self, profile_ids: Iterable[int]) -> List[Profile]:
        """
        Lock several profiles, always in ascending id order.

        Two payments touching the same pair of profiles then acquire the
        locks in the same order and cannot deadlock each other.
        """
        ids = sorted(set(profile_ids))
        result = await self.session.execute(
            select(Profile)
            .where(Profile.id.in_(ids))
            .order_by(Profile.id)
            .with_for_update()
            # Lock must return fresh rows even if the identity map has them
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
