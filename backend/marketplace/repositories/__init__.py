"""
Marketplace Backend — Repositories
====================================

What:  Typed query methods over the ORM models.
Why:   Join and filter logic stays out of the transactional services; a
       service asks for "contracts for this party" or "unpaid total for this
       client" and gets entities or plain rows back.

Repository Inventory:
    - ProfileRepository:  profile lookups, row locks
    - ContractRepository: contract lookups, party-scoped listing
    - JobRepository:      job lookups, unpaid sums, paid transition
    - ReportRepository:   read-only aggregates for admin reports

Every repository wraps one AsyncSession and never commits; committing is
the job of UnitOfWork (payments, deposits) or get_db_session (reads).
"""

from marketplace.repositories.profile_repository import ProfileRepository
from marketplace.repositories.contract_repository import ContractRepository
from marketplace.repositories.job_repository import JobRepository
from marketplace.repositories.report_repository import ReportRepository

__all__ = ["ProfileRepository", "ContractRepository", "JobRepository", "ReportRepository"]
