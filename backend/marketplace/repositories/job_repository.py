"""Job repository - database operations for jobs"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from marketplace.models.contract import Contract, ContractStatus
from marketplace.models.job import Job


class JobRepository:
    """Repository for job database operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_for_update(self, job_id: int) -> Optional[Job]:
        """
        Get a job with its contract loaded and the job row locked.

        FOR UPDATE is applied to the jobs table only; the contract row is
        read but not locked (its parties never change).
        """
        result = await self.session.execute(
            select(Job)
            .options(joinedload(Job.contract, innerjoin=True))
            .where(Job.id == job_id)
            .with_for_update(of=Job)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def mark_paid(self, job: Job, paid_at: datetime) -> bool:
        """
        Flip a job from unpaid to paid.

        The UPDATE only matches while the job is still unpaid, so of two
        racing payments exactly one sees rowcount == 1. Returns False for
        the loser. On success the in-session Job is refreshed.
        """
        result = await self.session.execute(
            update(Job)
            .where(Job.id == job.id, Job.unpaid_clause())
            .values(paid=True, payment_date=paid_at, updated_at=paid_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        await self.session.refresh(job)
        return True

    async def find_unpaid_for_party(self, profile_id: int) -> List[Job]:
        """Get unpaid jobs on in_progress contracts where the profile is a party"""
        result = await self.session.execute(
            select(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .where(
                Job.unpaid_clause(),
                Contract.status == ContractStatus.IN_PROGRESS.value,
                or_(Contract.client_id == profile_id, Contract.contractor_id == profile_id),
            )
            .order_by(Job.id)
        )
        return list(result.scalars().all())

    async def sum_unpaid_for_client(self, client_id: int) -> Decimal:
        """Sum of unpaid job prices on the client's in_progress contracts"""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Job.price), 0))
            .join(Contract, Job.contract_id == Contract.id)
            .where(
                Job.unpaid_clause(),
                Contract.status == ContractStatus.IN_PROGRESS.value,
                Contract.client_id == client_id,
            )
        )
        return Decimal(str(result.scalar_one()))
