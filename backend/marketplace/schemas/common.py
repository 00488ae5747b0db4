"""
Marketplace Backend — Shared Schema Building Blocks
=====================================================

What:  Base model, money type, and the error/health response models.
Why:   Every response uses camelCase keys (`clientId`, `paymentDate`) and
       money serialized as a JSON number, so those rules live in one place.
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


# NUMERIC columns come back as Decimal; Pydantic would emit them as strings
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """
    Base for API models: snake_case in Python, camelCase on the wire.

    populate_by_name lets services build models with Python names;
    from_attributes lets routes validate ORM objects directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "limit_exceeded",
            "message": "Deposit exceeds the allowed limit. Max allowed: 100.00",
            "details": {"max_allowed": 100.0},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
