"""Interface layer errors.

Translates domain errors into HTTP responses. Order matters: subclasses are
listed before their bases.
"""

import logfire
from fastapi import HTTPException, status

from whisper.domain.error import (
    AccountDisabledError,
    AuthenticationRequiredError,
    BusinessRuleViolationError,
    ConflictingIdentityError,
    DisplayNameTakenError,
    DomainError,
    InvalidCredentialsError,
    NotAuthorizedError,
    NotFoundError,
    UsernameTakenError,
    ValidationError,
)

STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (AccountDisabledError, status.HTTP_401_UNAUTHORIZED),
    (UsernameTakenError, status.HTTP_409_CONFLICT),
    (DisplayNameTakenError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolationError, status.HTTP_400_BAD_REQUEST),
    (ConflictingIdentityError, status.HTTP_400_BAD_REQUEST),
]


def status_for(error: DomainError) -> int:
    """Look up the HTTP status for a domain error (400 when unlisted)."""
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def to_http_exception(error: DomainError, action: str) -> HTTPException:
    """Convert a domain error raised while performing an action.

    Args:
        error: Domain error
        action: What the route was doing, for the log line

    Returns:
        HTTPException carrying the mapped status and the error message
    """
    code = status_for(error)
    logfire.warn(
        f"{action} failed",
        error=str(error),
        error_type=type(error).__name__,
        status_code=code,
    )
    return HTTPException(status_code=code, detail=str(error))


def unexpected_error(error: Exception, action: str) -> HTTPException:
    """Convert an unexpected exception into a 500 without leaking details."""
    logfire.error(
        f"Unexpected error: {action}",
        error=str(error),
        error_type=type(error).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
