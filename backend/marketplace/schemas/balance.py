"""
Marketplace Backend — Balance Schemas
=======================================

What:  Request/response models for POST /balances/deposit/{user_id}.

Why `amount` is optional and unconstrained here:
    A missing, zero or negative amount is a business-rule failure
    (400 invalid_argument from BalanceService), not a schema failure, so
    the check lives in the service next to the deposit cap.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from marketplace.schemas.common import Money


class DepositRequest(BaseModel):
    amount: Optional[Decimal] = Field(
        default=None,
        description="Amount to add to the client's balance (must be positive)",
        examples=[100],
    )


class DepositResponse(BaseModel):
    message: str = Field(default="Deposit successful")
    balance: Money = Field(description="Client balance after the deposit")
