"""
Marketplace Backend — Contract Route Handlers
===============================================

What:  GET /contracts (caller's non-terminated contracts) and
       GET /contracts/{contract_id} (one contract, parties only).
How:   Resolves the caller with get_principal, delegates to ContractService.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal, get_principal
from marketplace.database import get_db_session
from marketplace.schemas.common import ErrorResponse
from marketplace.schemas.contract import ContractResponse
from marketplace.services.contract_service import contract_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Contracts"])


@router.get(
    "",
    response_model=List[ContractResponse],
    responses={
        401: {"description": "Missing profile_id header", "model": ErrorResponse},
        404: {"description": "No non-terminated contracts", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the caller's active contracts",
)
async def list_contracts(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db_session),
) -> List[ContractResponse]:
    """Contracts where the caller is client or contractor, excluding terminated ones."""
    return await contract_service.list_contracts(db=db, principal=principal)


@router.get(
    "/{contract_id}",
    response_model=ContractResponse,
    responses={
        401: {"description": "Missing profile_id header", "model": ErrorResponse},
        403: {"description": "Caller is not a party to the contract", "model": ErrorResponse},
        404: {"description": "Contract not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a contract by ID",
)
async def get_contract(
    contract_id: int,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db_session),
) -> ContractResponse:
    return await contract_service.get_contract(db=db, contract_id=contract_id, principal=principal)
