"""
Marketplace Backend — Job Schemas
===================================

What:  Response models for GET /jobs/unpaid and POST /jobs/{id}/pay.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from marketplace.schemas.common import CamelModel, Money


class JobResponse(CamelModel):
    """
    A job under a contract.

    `paid` is tri-state: null (never touched), false, or true.
    """
    id: int = Field(description="Job identifier")
    description: str
    price: Money = Field(description="Amount transferred when the job is paid")
    paid: Optional[bool] = Field(default=None, description="Null or false while unpaid")
    payment_date: Optional[datetime] = Field(
        default=None, description="When the job was paid (UTC); null while unpaid"
    )
    contract_id: int


class PaymentResponse(BaseModel):
    """Returned by POST /jobs/{id}/pay after the transfer has committed."""
    message: str = Field(default="Payment successful")
