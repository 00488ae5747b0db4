"""
Marketplace Backend — Unit of Work
====================================

What:  A scoped transaction around one payment or deposit.
Why:   Every balance mutation must be all-or-nothing: both sides of a
       payment update, or neither does.
How:   `async with UnitOfWork(session) as uow:` exposes the repositories
       bound to the session. Leaving the block normally commits; leaving it
       with any exception rolls back and re-raises.

Usage:
    async with UnitOfWork(db) as uow:
        job = await uow.jobs.get_for_update(job_id)
        ...
    # committed here
"""

import logging
from types import TracebackType
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.repositories import JobRepository, ProfileRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.profiles = ProfileRepository(session)
        self.jobs = JobRepository(session)

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            await self.session.commit()
            return
        logger.debug("Rolling back unit of work: %s", exc_type.__name__)
        await self.session.rollback()
