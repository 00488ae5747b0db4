"""
Marketplace Backend — Admin Report Route Handlers
===================================================

What:  GET /admin/best-profession and GET /admin/best-clients.
Why:   Read-only summaries over paid jobs for administrators.

Dates arrive as raw strings; AdminService parses them so that a missing
or malformed date is a 400 with a readable message.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.database import get_db_session
from marketplace.schemas.common import ErrorResponse
from marketplace.schemas.report import BestClientResponse, BestProfessionResponse
from marketplace.services.admin_service import admin_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/best-profession",
    response_model=BestProfessionResponse,
    responses={
        400: {"description": "Missing or invalid dates", "model": ErrorResponse},
        404: {"description": "No paid jobs in the range", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Profession that earned the most in a date range",
)
async def best_profession(
    start: Optional[str] = Query(default=None, description="Range start (YYYY-MM-DD or ISO datetime)"),
    end: Optional[str] = Query(default=None, description="Range end, inclusive"),
    db: AsyncSession = Depends(get_db_session),
) -> BestProfessionResponse:
    return await admin_service.best_profession(db=db, start=start, end=end)


@router.get(
    "/best-clients",
    response_model=List[BestClientResponse],
    responses={
        400: {"description": "Missing or invalid dates or limit", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Clients who paid the most in a date range",
)
async def best_clients(
    start: Optional[str] = Query(default=None, description="Range start (YYYY-MM-DD or ISO datetime)"),
    end: Optional[str] = Query(default=None, description="Range end, inclusive"),
    limit: Optional[int] = Query(default=None, description="Maximum number of clients (default 2)"),
    db: AsyncSession = Depends(get_db_session),
) -> List[BestClientResponse]:
    return await admin_service.best_clients(db=db, start=start, end=end, limit=limit)
