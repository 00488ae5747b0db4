"""
Marketplace Backend — Admin Report Service
============================================

What:  Aggregate reports over paid jobs within a date range.
Who:   Called by GET /admin/best-profession and GET /admin/best-clients.

Date Range Semantics:
    `start` and `end` are ISO 8601 dates or datetimes; naive values are UTC.
    The range is inclusive on both ends:
        end = "2024-08-15"           → covers the whole of Aug 15
        end = "2024-08-15T12:00:00"  → covers up to and including noon
    Internally this becomes a half-open [start, end') range for the SQL.

Reports are read-only and run on the request session without locks.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import settings
from marketplace.exceptions import DatabaseError, InvalidArgumentError, MarketplaceError, NotFoundError
from marketplace.repositories import ReportRepository
from marketplace.schemas.report import BestClientResponse, BestProfessionResponse

logger = logging.getLogger(__name__)

_DATE_ONLY_LENGTH = len("YYYY-MM-DD")
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def _parse_bound(value: Optional[str], field: str, is_end: bool) -> datetime:
    if not value:
        raise InvalidArgumentError(message="start and end date are required", field=field)
    try:
        if len(value) == _DATE_ONLY_LENGTH:
            day = date.fromisoformat(value)
            parsed = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
            step = timedelta(days=1)
        else:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            step = timedelta(microseconds=1)
    except ValueError:
        raise InvalidArgumentError(
            message=f"Invalid date format for '{field}': {value}",
            field=field,
        )
    try:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        else:
            parsed = parsed.astimezone(timezone.utc)
        return parsed + step if is_end else parsed
    except OverflowError:
        # Bounds past the last representable instant clamp to the calendar edge
        return _LATEST if parsed.year == _LATEST.year else _EARLIEST


def parse_date_range(start: Optional[str], end: Optional[str]) -> Tuple[datetime, datetime]:
    """Parse an inclusive [start, end] into a half-open UTC range."""
    start_dt = _parse_bound(start, "start", is_end=False)
    end_dt = _parse_bound(end, "end", is_end=True)
    if start_dt >= end_dt:
        raise InvalidArgumentError(message="start date must not be after end date", field="start")
    return start_dt, end_dt


class AdminService:

    async def best_profession(
        self, db: AsyncSession, start: Optional[str], end: Optional[str]
    ) -> BestProfessionResponse:
        """
        Contractor profession that earned the most in the range.

        Ties go to the profession whose earliest paid job (lowest id) comes first.

        Raises:
            InvalidArgumentError: missing or malformed dates (→ 400)
            NotFoundError: no paid jobs in the range (→ 404)
        """
        start_dt, end_dt = parse_date_range(start, end)
        try:
            best = await ReportRepository(db).top_profession(start_dt, end_dt)
            if best is None:
                raise NotFoundError(resource="profession", message="No profession found in given range")
            return BestProfessionResponse(
                profession=best.profession,
                total_earnings=best.total_earnings,
            )

        except MarketplaceError:
            raise
        except Exception as e:
            logger.error("Database error computing best profession: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not compute the report. Please try again.",
                context={"report": "best_profession"},
            ) from e

    async def best_clients(
        self,
        db: AsyncSession,
        start: Optional[str],
        end: Optional[str],
        limit: Optional[int] = None,
    ) -> List[BestClientResponse]:
        """Clients who paid the most in the range, highest first, at most `limit`."""
        start_dt, end_dt = parse_date_range(start, end)
        if limit is None:
            limit = settings.best_clients_default_limit
        if limit < 1:
            raise InvalidArgumentError(message="limit must be a positive integer", field="limit")
        try:
            rows = await ReportRepository(db).top_clients(start_dt, end_dt, limit)
            return [
                BestClientResponse(id=row.id, full_name=row.full_name, paid=row.paid)
                for row in rows
            ]

        except MarketplaceError:
            raise
        except Exception as e:
            logger.error("Database error computing best clients: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not compute the report. Please try again.",
                context={"report": "best_clients"},
            ) from e


admin_service = AdminService()
