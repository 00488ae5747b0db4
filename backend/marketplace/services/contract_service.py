"""
Marketplace Backend — Contract Service
========================================

What:  Read-only access to contracts, scoped to the calling party.
Who:   Called by GET /contracts and GET /contracts/{id}.

Design choice: an empty listing is reported as NotFoundError (404), not as
an empty array, so clients can tell "no active contracts" apart from a
successful page of results.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal
from marketplace.exceptions import DatabaseError, ForbiddenError, MarketplaceError, NotFoundError
from marketplace.repositories import ContractRepository
from marketplace.schemas.contract import ContractResponse

logger = logging.getLogger(__name__)


class ContractService:

    async def get_contract(
        self, db: AsyncSession, contract_id: int, principal: Principal
    ) -> ContractResponse:
        """
        Fetch one contract the caller is a party to.

        Raises:
            NotFoundError: no contract with this id (→ 404)
            ForbiddenError: caller is neither client nor contractor (→ 403)
        """
        try:
            contract = await ContractRepository(db).get(contract_id)
            if contract is None:
                raise NotFoundError(resource="contract", resource_id=contract_id, message="Contract not found")
            if not contract.involves(principal.profile_id):
                raise ForbiddenError(message="Forbidden: You do not own this contract")
            return ContractResponse.model_validate(contract)

        except MarketplaceError:
            raise
        except Exception as e:
            logger.error("Database error fetching contract %s: %s", contract_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the contract. Please try again.",
                context={"contract_id": contract_id},
            ) from e

    async def list_contracts(self, db: AsyncSession, principal: Principal) -> List[ContractResponse]:
        """Non-terminated contracts where the caller is client or contractor."""
        try:
            contracts = await ContractRepository(db).find_contracts_for_party(principal.profile_id)
            if not contracts:
                raise NotFoundError(resource="contract", message="No active contracts found")
            return [ContractResponse.model_validate(c) for c in contracts]

        except MarketplaceError:
            raise
        except Exception as e:
            logger.error("Database error listing contracts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve contracts. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e


contract_service = ContractService()
