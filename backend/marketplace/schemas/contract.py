"""
Marketplace Backend — Contract Schemas
========================================

What:  Response models for GET /contracts and GET /contracts/{id}.
"""

from datetime import datetime

from pydantic import Field

from marketplace.schemas.common import CamelModel


class ContractResponse(CamelModel):
    """A contract as seen by one of its parties."""
    id: int = Field(description="Contract identifier")
    terms: str = Field(description="Free-text terms of the engagement")
    status: str = Field(description="Lifecycle state: new, in_progress, terminated")
    client_id: int = Field(description="Profile id of the client")
    contractor_id: int = Field(description="Profile id of the contractor")
    created_at: datetime
    updated_at: datetime
