"""
Marketplace Backend — Balance Route Handlers
==============================================

What:  POST /balances/deposit/{user_id} with body {"amount": <number>}.
Why:   Clients top up their own balance, up to 25% of their outstanding
       unpaid work (see BalanceService).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal, get_principal
from marketplace.database import get_db_session
from marketplace.schemas.balance import DepositRequest, DepositResponse
from marketplace.schemas.common import ErrorResponse
from marketplace.services.balance_service import balance_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/balances", tags=["Balances"])


@router.post(
    "/deposit/{user_id}",
    response_model=DepositResponse,
    responses={
        400: {"description": "Invalid amount, no outstanding jobs, or cap exceeded", "model": ErrorResponse},
        401: {"description": "Missing profile_id header", "model": ErrorResponse},
        403: {"description": "Depositing into another profile", "model": ErrorResponse},
        404: {"description": "Client not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Deposit into a client's balance",
)
async def deposit(
    user_id: int,
    payload: Optional[DepositRequest] = None,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db_session),
) -> DepositResponse:
    return await balance_service.deposit(
        db=db,
        user_id=user_id,
        amount=payload.amount if payload else None,
        principal=principal,
    )
