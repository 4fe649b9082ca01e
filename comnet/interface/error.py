"""Interface layer errors."""

from fastapi import HTTPException, status

from comnet.domain.error import (
    DomainError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationError(InterfaceError):
    """Request carries no usable credentials."""

    pass


_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
]


def to_http_exception(error: Exception) -> HTTPException:
    """Translate an interface or domain error into an HTTP error.

    Domain errors without a dedicated status are client errors.
    """
    if isinstance(error, AuthenticationError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error)
        )

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))

    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
