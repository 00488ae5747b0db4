"""
Marketplace Backend — Admin Report Schemas
============================================

What:  Response models for GET /admin/best-profession and /admin/best-clients.
"""

from pydantic import Field

from marketplace.schemas.common import CamelModel, Money


class BestProfessionResponse(CamelModel):
    profession: str = Field(description="Contractor profession with the highest paid total")
    total_earnings: Money = Field(description="Sum of paid job prices in the range")


class BestClientResponse(CamelModel):
    id: int = Field(description="Client profile id")
    full_name: str = Field(description="First and last name")
    paid: Money = Field(description="Total paid by the client in the range")
