"""
Marketplace Backend — Payment Service
=======================================

What:  Pays a job: moves its price from the contract's client to the
       contract's contractor and marks the job paid.
Why:   The one operation that mutates two balances at once; it must be
       all-or-nothing and must never pay a job twice.
How:   One UnitOfWork. Row locks plus a conditional UPDATE on the job.
Who:   Called by POST /jobs/{job_id}/pay.

Transaction Flow:
    ┌──────────────┐   ┌───────────┐   ┌──────────────┐   ┌──────────────┐
    │ Lock job row │──▶│ Authorize │──▶│ Lock client  │──▶│ Mark paid    │
    │ (+ contract) │   │ (client?) │   │ + contractor │   │ move balance │
    └──────────────┘   └───────────┘   └──────────────┘   └──────────────┘
                                                                 │
                                              commit ◀───────────┘

    Any error on the way rolls the whole unit of work back.

Concurrency:
    Two requests paying the same job serialize on the job's row lock. The
    second one reads `paid = true` once the first commits and gets
    InvalidStateError. Where the database cannot lock rows, the
    conditional `UPDATE ... WHERE paid IS NULL OR paid = false` still lets
    only one of them through. Nothing is retried: the caller must check
    the job before resubmitting a payment.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal
from marketplace.exceptions import (
    DatabaseError,
    ForbiddenError,
    InsufficientFundsError,
    InvalidStateError,
    MarketplaceError,
    NotFoundError,
)
from marketplace.schemas.job import PaymentResponse
from marketplace.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Business logic for paying jobs.

    Error order (first failing check wins):
        job missing          → NotFoundError
        caller not client    → ForbiddenError
        job already paid     → InvalidStateError
        balance below price  → InsufficientFundsError
    """

    async def pay_job(
        self,
        db: AsyncSession,
        job_id: int,
        principal: Principal,
        now: Optional[datetime] = None,
    ) -> PaymentResponse:
        """
        Pay a job's price from its contract's client to its contractor.

        Args:
            db: Async database session (injected by FastAPI)
            job_id: Job to pay
            principal: Resolved caller identity; must be the contract's client
            now: Payment timestamp override (defaults to current UTC time)

        Returns:
            PaymentResponse once the transfer has committed

        Raises:
            NotFoundError, ForbiddenError, InvalidStateError,
            InsufficientFundsError, DatabaseError
        """
        paid_at = now or datetime.now(timezone.utc)

        try:
            async with UnitOfWork(db) as uow:
                job = await uow.jobs.get_for_update(job_id)
                if job is None:
                    raise NotFoundError(resource="job", resource_id=job_id, message="Job not found")

                contract = job.contract
                if contract.client_id != principal.profile_id:
                    raise ForbiddenError(message="Only the client can pay for the job")

                if job.is_paid:
                    raise InvalidStateError(
                        message="Job already paid for",
                        context={"job_id": job_id},
                    )

                locked = {
                    p.id: p
                    for p in await uow.profiles.lock_many(
                        [contract.client_id, contract.contractor_id]
                    )
                }
                client = locked.get(contract.client_id)
                contractor = locked.get(contract.contractor_id)
                if client is None or contractor is None:
                    raise NotFoundError(resource="profile", message="Contract party not found")

                price = job.price
                if client.balance < price:
                    raise InsufficientFundsError(
                        context={"job_id": job_id, "price": float(price)},
                    )

                if not await uow.jobs.mark_paid(job, paid_at):
                    # Lost a race with a concurrent payment of the same job
                    raise InvalidStateError(
                        message="Job already paid for",
                        context={"job_id": job_id},
                    )

                client.balance = client.balance - price
                contractor.balance = contractor.balance + price

            logger.info(
                "Job %s paid: %s moved from profile %s to profile %s",
                job_id, price, contract.client_id, contract.contractor_id,
            )
            return PaymentResponse(message="Payment successful")

        except MarketplaceError as e:
            if e.status_code < 500:
                logger.warning("Payment of job %s rejected: %s", job_id, e.message)
            raise
        except Exception as e:
            logger.error("Unexpected error paying job %s: %s", job_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not complete the payment. Please try again later.",
                context={"job_id": job_id, "error_type": type(e).__name__},
            ) from e


# ── Singleton Instance ────────────────────────────────────────────────────
payment_service = PaymentService()
