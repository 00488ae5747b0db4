"""Contract repository - database operations for contracts"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.models.contract import Contract, ContractStatus


class ContractRepository:
    """Repository for contract database operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, contract_id: int) -> Optional[Contract]:
        return await self.session.get(Contract, contract_id)

    async def find_contracts_for_party(self, profile_id: int) -> List[Contract]:
        """Get non-terminated contracts where the profile is client or contractor, oldest first"""
        result = await self.session.execute(
            select(Contract)
            .where(
                or_(Contract.client_id == profile_id, Contract.contractor_id == profile_id),
                Contract.status != ContractStatus.TERMINATED.value,
            )
            .order_by(Contract.id)
        )
        return list(result.scalars().all())
