"""
Marketplace Backend — Contract SQLAlchemy Model
=================================================

What:  ORM model representing the `contracts` table.
Why:   A contract links exactly one client profile to one contractor profile;
       jobs are billed under it.

Lifecycle:
    new → in_progress → terminated

    Only `in_progress` contracts count towards a client's outstanding total
    and towards the unpaid-jobs listing. Terminated contracts are hidden from
    the contract listing.
"""

import enum
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TIMESTAMP

from marketplace.database import Base

if TYPE_CHECKING:
    from marketplace.models.job import Job
    from marketplace.models.profile import Profile


class ContractStatus(str, enum.Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    TERMINATED = "terminated"


class Contract(Base):
    """An engagement between one client and one contractor."""

    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    terms: Mapped[str] = mapped_column(Text, nullable=False, default="")

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ContractStatus.NEW.value,
        server_default=text("'new'"),
        comment="Lifecycle state: new, in_progress, terminated",
    )

    client_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id"), nullable=False
    )
    contractor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("profiles.id"), nullable=False
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

    client: Mapped["Profile"] = relationship(
        back_populates="client_contracts", foreign_keys=[client_id]
    )
    contractor: Mapped["Profile"] = relationship(
        back_populates="contractor_contracts", foreign_keys=[contractor_id]
    )
    jobs: Mapped[List["Job"]] = relationship(back_populates="contract")

    # Party lookups filter on client_id or contractor_id plus status
    __table_args__ = (
        CheckConstraint(
            "status IN ('new', 'in_progress', 'terminated')",
            name="ck_contracts_status",
        ),
        Index("idx_contracts_client_status", "client_id", "status"),
        Index("idx_contracts_contractor_status", "contractor_id", "status"),
    )

    def involves(self, profile_id: int) -> bool:
        """True if the profile is this contract's client or contractor."""
        return profile_id in (self.client_id, self.contractor_id)

    def __repr__(self) -> str:
        return (
            f"<Contract(id={self.id}, status='{self.status}', "
            f"client_id={self.client_id}, contractor_id={self.contractor_id})>"
        )
