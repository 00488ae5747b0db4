"""
Marketplace Backend — Caller Identity Resolution
==================================================

What:  Turns the caller-asserted `profile_id` header into a `Principal`.
Why:   Services must only ever see a resolved identity, never raw headers.
       Real authentication is out of scope; this dependency is the single
       seam where it would be plugged in.
How:   FastAPI dependency. The value is trusted as-is: no database lookup,
       so depositing as an unknown id reaches the service and gets a 404
       for the missing client rather than a 401 here.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Header

from marketplace.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The resolved identity of the caller."""

    profile_id: int


async def get_principal(
    profile_id: Optional[str] = Header(
        default=None,
        convert_underscores=False,
        description="Profile id of the caller (asserted by the caller)",
    ),
) -> Principal:
    """
    FastAPI dependency resolving the acting identity.

    Raises:
        AuthenticationError: header missing or not a positive integer (→ 401)
    """
    if profile_id is None or not profile_id.strip():
        raise AuthenticationError()
    try:
        value = int(profile_id)
    except ValueError:
        logger.warning("Rejected non-integer profile_id header: %r", profile_id)
        raise AuthenticationError(message="profile_id header must be an integer")
    if value <= 0:
        raise AuthenticationError(message="profile_id header must be a positive integer")
    return Principal(profile_id=value)
