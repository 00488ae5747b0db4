"""
Marketplace Backend — ORM Models Package
==========================================

Importing this package registers every table with `Base.metadata`
(needed by Alembic autogenerate and by the test suite's create_all()).
"""

from marketplace.models.profile import Profile, ProfileType
from marketplace.models.contract import Contract, ContractStatus
from marketplace.models.job import Job

__all__ = ["Profile", "ProfileType", "Contract", "ContractStatus", "Job"]
