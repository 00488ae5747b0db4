"""
Marketplace Backend — Job Service
===================================

What:  Lists the caller's unpaid jobs.
Who:   Called by GET /jobs/unpaid.

"Unpaid" means `paid` is NULL or false, on an in_progress contract where
the caller is the client or the contractor. An empty result is a 404.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.auth import Principal
from marketplace.exceptions import DatabaseError, MarketplaceError, NotFoundError
from marketplace.repositories import JobRepository
from marketplace.schemas.job import JobResponse

logger = logging.getLogger(__name__)


class JobService:

    async def list_unpaid_jobs(self, db: AsyncSession, principal: Principal) -> List[JobResponse]:
        try:
            jobs = await JobRepository(db).find_unpaid_for_party(principal.profile_id)
            if not jobs:
                raise NotFoundError(resource="job", message="No unpaid jobs found")
            return [JobResponse.model_validate(job) for job in jobs]

        except MarketplaceError:
            raise
        except Exception as e:
            logger.error("Database error listing unpaid jobs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve unpaid jobs. Please try again.",
                context={"profile_id": principal.profile_id},
            ) from e


job_service = JobService()
