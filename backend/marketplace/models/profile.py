"""
Marketplace Backend — Profile SQLAlchemy Model
================================================

What:  ORM model representing the `profiles` table.
Why:   Clients and contractors share one table; `type` tells them apart.
Who:   Read by every service; mutated only by PaymentService and BalanceService.

Table Design Rationale:
    - Integer primary key: profiles are addressed by the numeric `profile_id`
      header, so ids must stay small and stable
    - balance: NUMERIC(12, 2) so money never goes through binary floats
    - CHECK balance >= 0: the database rejects an overdraft even if a
      service-level check were ever skipped
    - Profiles are never deleted
"""

import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TIMESTAMP

from marketplace.database import Base

if TYPE_CHECKING:
    from marketplace.models.contract import Contract


class ProfileType(str, enum.Enum):
    CLIENT = "client"
    CONTRACTOR = "contractor"


class Profile(Base):
    """
    A client or contractor account with a monetary balance.

    Query Patterns:
        - Lock for payment/deposit: SELECT ... WHERE id = :id FOR UPDATE
        - Report joins: profiles joined through contracts.client_id /
          contracts.contractor_id
    """

    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    profession: Mapped[str] = mapped_column(String(100), nullable=False)

    balance: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0"),
        server_default=text("0"),
        comment="Available funds; never negative",
    )

    # Values: 'client' | 'contractor'
    type: Mapped[str] = mapped_column(String(20), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    client_contracts: Mapped[List["Contract"]] = relationship(
        back_populates="client",
        foreign_keys="Contract.client_id",
    )
    contractor_contracts: Mapped[List["Contract"]] = relationship(
        back_populates="contractor",
        foreign_keys="Contract.contractor_id",
    )

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_profiles_balance_non_negative"),
        CheckConstraint(
            "type IN ('client', 'contractor')", name="ck_profiles_type"
        ),
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, type='{self.type}', balance={self.balance})>"
