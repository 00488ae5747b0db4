"""Create profiles, contracts and jobs tables

Revision ID: 001
Revises: None
Create Date: 2024-08-01 00:00:00.000000+00:00

What:  Creates the three marketplace tables with their CHECK constraints
       and the indexes used by party lookups and paid-job reports.
How:   Column rationale is documented on the models in marketplace/models/.

Rollback: downgrade() drops all three tables (destructive — all balances,
contracts and payment history are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("profession", sa.String(100), nullable=False),
        sa.Column(
            "balance",
            sa.Numeric(12, 2),
            server_default=sa.text("0"),
            nullable=False,
            comment="Available funds; never negative",
        ),
        sa.Column("type", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("balance >= 0", name="ck_profiles_balance_non_negative"),
        sa.CheckConstraint("type IN ('client', 'contractor')", name="ck_profiles_type"),
    )

    op.create_table(
        "contracts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("terms", sa.Text(), nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            server_default=sa.text("'new'"),
            nullable=False,
            comment="Lifecycle state: new, in_progress, terminated",
        ),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("contractor_id", sa.Integer(), sa.ForeignKey("profiles.id"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('new', 'in_progress', 'terminated')", name="ck_contracts_status"
        ),
    )
    op.create_index("idx_contracts_client_status", "contracts", ["client_id", "status"])
    op.create_index("idx_contracts_contractor_status", "contracts", ["contractor_id", "status"])

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "paid",
            sa.Boolean(),
            nullable=True,
            comment="NULL or false = unpaid, true = paid",
        ),
        sa.Column(
            "payment_date",
            sa.TIMESTAMP(timezone=True),
            nullable=True,
            comment="When the job was paid (UTC); NULL while unpaid",
        ),
        sa.Column("contract_id", sa.Integer(), sa.ForeignKey("contracts.id"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price > 0", name="ck_jobs_price_positive"),
    )
    op.create_index("idx_jobs_contract_id", "jobs", ["contract_id"])
    op.create_index("idx_jobs_payment_date", "jobs", ["payment_date"])


def downgrade() -> None:
    """
    Drop all marketplace tables, children first.

    WARNING: destructive. Production rollbacks should archive payment
    history in a forward migration instead.
    """
    op.drop_index("idx_jobs_payment_date", table_name="jobs")
    op.drop_index("idx_jobs_contract_id", table_name="jobs")
    op.drop_table("jobs")
    op.drop_index("idx_contracts_contractor_status", table_name="contracts")
    op.drop_index("idx_contracts_client_status", table_name="contracts")
    op.drop_table("contracts")
    op.drop_table("profiles")
