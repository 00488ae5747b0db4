"""
Marketplace Backend — Job SQLAlchemy Model
============================================

What:  ORM model representing the `jobs` table.
Why:   A job is the billable unit of work under a contract.

Paid state is tri-state:
    NULL   → never touched (unpaid)
    false  → explicitly unpaid
    true   → paid; `payment_date` is set in the same UPDATE

    Both NULL and false count as unpaid everywhere (see `Job.unpaid_clause`).
    The transition to true happens exactly once and never reverts.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, Numeric, Text, or_, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TIMESTAMP

from marketplace.database import Base

if TYPE_CHECKING:
    from marketplace.models.contract import Contract


class Job(Base):
    """A billable unit of work under a contract."""

    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Fixed at creation; payment transfers exactly this amount
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    paid: Mapped[Optional[bool]] = mapped_column(
        Boolean,
        nullable=True,
        default=None,
        comment="NULL or false = unpaid, true = paid",
    )

    payment_date: Mapped[Optional[datetime]] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=True,
        default=None,
        comment="When the job was paid (UTC); NULL while unpaid",
    )

    contract_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contracts.id"), nullable=False
    )

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

    contract: Mapped["Contract"] = relationship(back_populates="jobs")

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_jobs_price_positive"),
        Index("idx_jobs_contract_id", "contract_id"),
        # Reports scan paid jobs by payment date
        Index("idx_jobs_payment_date", "payment_date"),
    )

    @property
    def is_paid(self) -> bool:
        return self.paid is True

    @classmethod
    def unpaid_clause(cls):
        """SQL predicate matching unpaid jobs (paid IS NULL OR paid = false)."""
        return or_(cls.paid.is_(None), cls.paid.is_(False))

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, price={self.price}, paid={self.paid})>"
