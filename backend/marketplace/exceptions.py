"""
Marketplace Backend — Custom Exception Hierarchy
==================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, the auth dependency and middleware.

Exception Hierarchy:
    MarketplaceError (base)
    ├── InvalidArgumentError     → 400 Bad Request
    ├── InvalidStateError        → 400 Bad Request (e.g. job already paid)
    ├── InsufficientFundsError   → 400 Bad Request
    ├── LimitExceededError       → 400 Bad Request (deposit cap)
    ├── AuthenticationError      → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error

Every class declares `status_code` and `error_code`; the handlers in main.py
read them to build the response body.
"""

from decimal import Decimal
from typing import Any, Dict, Optional


class MarketplaceError(Exception):
    """
    Base exception for all marketplace application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (returned as `details` for 4xx errors,
                  logged only for 5xx errors)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidArgumentError(MarketplaceError):
    """
    Raised when client input fails a business validation rule.

    When:    Non-positive deposit amount, unparseable report dates.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "invalid_argument"

    def __init__(
        self,
        message: str = "Invalid argument",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidStateError(MarketplaceError):
    """
    Raised when an operation is not allowed in the entity's current state.

    When:    Paying a job that is already paid (including the loser of two
             concurrent payments), depositing with no outstanding work.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "invalid_state"

    def __init__(
        self,
        message: str = "Operation not allowed in the current state",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InsufficientFundsError(MarketplaceError):
    """
    Raised when a client's balance cannot cover a job's price.

    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "insufficient_funds"

    def __init__(
        self,
        message: str = "Insufficient balance to pay for this job",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LimitExceededError(MarketplaceError):
    """
    Raised when a deposit is larger than the client's deposit cap.

    The message always states the computed maximum so the caller can
    resubmit a smaller amount.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "limit_exceeded"

    def __init__(
        self,
        max_allowed: Decimal,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"Deposit exceeds the allowed limit. Max allowed: {max_allowed}"
        ctx = context or {}
        ctx["max_allowed"] = float(max_allowed)
        super().__init__(message=message, context=ctx)
        self.max_allowed = max_allowed


class AuthenticationError(MarketplaceError):
    """
    Raised when the request carries no usable caller identity.

    When:    The `profile_id` header is missing or not an integer.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    error_code = "unauthenticated"

    def __init__(
        self,
        message: str = "A valid profile_id header is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(MarketplaceError):
    """
    Raised when the caller is not allowed to act on a resource.

    When:    Fetching someone else's contract, paying a job as anyone but the
             contract's client, depositing into another profile.
    HTTP:    403 Forbidden
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "You are not allowed to access this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MarketplaceError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records (not an exception), and list
    queries return empty lists; services convert both into NotFoundError.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class DatabaseError(MarketplaceError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. Detailed error
    info is logged server-side only.
    HTTP:    500 Internal Server Error
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(MarketplaceError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests (with Retry-After header)
    """

    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
