"""
Marketplace Backend — Balance Service
=======================================

What:  Deposits money into a client's own balance.
Why:   Deposits are capped by the client's outstanding work: a client may
       deposit at most 25% of the total price of its unpaid jobs on
       in_progress contracts.
How:   One UnitOfWork; the client row is locked while the cap is computed
       and the balance updated.
Who:   Called by POST /balances/deposit/{user_id}.

Cap Rule:
    outstanding = sum(price) of unpaid jobs on the client's in_progress contracts
    max_allowed = 0.25 * outstanding

    outstanding == 0       → deposits are refused (InvalidStateError)
    amount > max_allowed   → LimitExceededError (message states max_allowed)

    Example: one unpaid job of 400 → deposits up to 100 are accepted.
"""

import logging
from decimal import ROUND_DOWN, Decimal
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal
from marketplace.exceptions import (
    DatabaseError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    LimitExceededError,
    MarketplaceError,
    NotFoundError,
)
from marketplace.schemas.balance import DepositResponse
from marketplace.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

DEPOSIT_CAP_RATIO = Decimal("0.25")
CENT = Decimal("0.01")


def _validate_amount(amount: Optional[Decimal]) -> Decimal:
    if amount is None or not amount.is_finite() or amount <= 0:
        raise InvalidArgumentError(message="Invalid deposit amount", field="amount")
    if amount.normalize().as_tuple().exponent < -2:
        raise InvalidArgumentError(
            message="Deposit amount cannot have more than two decimal places",
            field="amount",
        )
    return amount


class BalanceService:
    """
    Business logic for balance deposits.

    Error order (first failing check wins):
        target missing or not a client  → NotFoundError
        caller is not the target        → ForbiddenError
        amount missing or <= 0          → InvalidArgumentError
        no outstanding unpaid work      → InvalidStateError
        amount above the cap            → LimitExceededError
    """

    async def deposit(
        self,
        db: AsyncSession,
        user_id: int,
        amount: Optional[Decimal],
        principal: Principal,
    ) -> DepositResponse:
        try:
            async with UnitOfWork(db) as uow:
                client = await uow.profiles.get_client_for_update(user_id)
                if client is None:
                    raise NotFoundError(resource="client", resource_id=user_id, message="Client not found")

                if principal.profile_id != client.id:
                    raise ForbiddenError(message="You can only deposit into your own balance")

                amount = _validate_amount(amount)

                outstanding = await uow.jobs.sum_unpaid_for_client(client.id)
                if outstanding <= 0:
                    raise InvalidStateError(
                        message="No outstanding unpaid jobs; deposits are not accepted",
                        context={"client_id": client.id},
                    )

                cap = outstanding * DEPOSIT_CAP_RATIO
                if amount > cap:
                    raise LimitExceededError(
                        max_allowed=cap.quantize(CENT, rounding=ROUND_DOWN),
                        context={"client_id": client.id},
                    )

                client.balance = client.balance + amount
                new_balance = client.balance

            logger.info("Deposit of %s into profile %s; balance now %s", amount, user_id, new_balance)
            return DepositResponse(message="Deposit successful", balance=new_balance)

        except MarketplaceError as e:
            if e.status_code < 500:
                logger.warning("Deposit into profile %s rejected: %s", user_id, e.message)
            raise
        except Exception as e:
            logger.error("Unexpected error depositing into profile %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not complete the deposit. Please try again later.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            ) from e


balance_service = BalanceService()
