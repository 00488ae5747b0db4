"""
Marketplace Backend — Job Route Handlers
==========================================

What:  GET /jobs/unpaid and POST /jobs/{job_id}/pay.

POST /jobs/{job_id}/pay is NOT safe to retry blindly: if the response is
lost after the payment committed, a resubmission gets 400 "already paid".
Clients should re-read the job state instead of retrying.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal, get_principal
from marketplace.database import get_db_session
from marketplace.schemas.common import ErrorResponse
from marketplace.schemas.job import JobResponse, PaymentResponse
from marketplace.services.job_service import job_service
from marketplace.services.payment_service import payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get(
    "/unpaid",
    response_model=List[JobResponse],
    responses={
        401: {"description": "Missing profile_id header", "model": ErrorResponse},
        404: {"description": "No unpaid jobs", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the caller's unpaid jobs on active contracts",
)
async def list_unpaid_jobs(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db_session),
) -> List[JobResponse]:
    return await job_service.list_unpaid_jobs(db=db, principal=principal)


@router.post(
    "/{job_id}/pay",
    response_model=PaymentResponse,
    responses={
        400: {"description": "Job already paid or insufficient funds", "model": ErrorResponse},
        401: {"description": "Missing profile_id header", "model": ErrorResponse},
        403: {"description": "Caller is not the contract's client", "model": ErrorResponse},
        404: {"description": "Job not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Pay for a job",
    description=(
        "Moves the job's price from the client's balance to the contractor's balance "
        "and marks the job paid, atomically."
    ),
)
async def pay_job(
    job_id: int,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db_session),
) -> PaymentResponse:
    logger.info("Payment requested for job %s by profile %s", job_id, principal.profile_id)
    return await payment_service.pay_job(db=db, job_id=job_id, principal=principal)
