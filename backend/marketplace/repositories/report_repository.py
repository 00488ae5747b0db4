"""Report repository - read-only aggregates over paid jobs"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.models.contract import Contract
from marketplace.models.job import Job
from marketplace.models.profile import Profile


@dataclass(frozen=True)
class ProfessionEarnings:
    profession: str
    total_earnings: Decimal


@dataclass(frozen=True)
class ClientPayments:
    id: int
    full_name: str
    paid: Decimal


class ReportRepository:
    """
    Aggregates over jobs paid within [start, end).

    Callers pass a half-open range; AdminService turns an inclusive
    date-only end into the start of the following day.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _paid_between(query, start: datetime, end: datetime):
        return query.where(
            Job.paid.is_(True),
            Job.payment_date >= start,
            Job.payment_date < end,
        )

    async def top_profession(self, start: datetime, end: datetime) -> Optional[ProfessionEarnings]:
        """Contractor profession with the highest paid total, or None"""
        total = func.sum(Job.price).label("total")
        query = (
            select(Profile.profession, total)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.contractor_id == Profile.id)
        )
        query = (
            self._paid_between(query, start, end)
            .group_by(Profile.profession)
            # Ties go to the profession whose earliest job comes first
            .order_by(desc(total), func.min(Job.id))
            .limit(1)
        )
        row = (await self.session.execute(query)).first()
        if row is None:
            return None
        return ProfessionEarnings(profession=row.profession, total_earnings=Decimal(str(row.total)))

    async def top_clients(self, start: datetime, end: datetime, limit: int) -> List[ClientPayments]:
        """Clients ordered by total paid, highest first"""
        total = func.sum(Job.price).label("total")
        query = (
            select(Profile.id, Profile.first_name, Profile.last_name, total)
            .select_from(Job)
            .join(Contract, Job.contract_id == Contract.id)
            .join(Profile, Contract.client_id == Profile.id)
        )
        query = (
            self._paid_between(query, start, end)
            .group_by(Profile.id, Profile.first_name, Profile.last_name)
            .order_by(desc(total), Profile.id)
            .limit(limit)
        )
        rows = (await self.session.execute(query)).all()
        return [
            ClientPayments(
                id=row.id,
                full_name=f"{row.first_name} {row.last_name}",
                paid=Decimal(str(row.total)),
            )
            for row in rows
        ]
