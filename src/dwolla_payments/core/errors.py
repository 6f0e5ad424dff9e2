"""
Exceptions raised by the Dwolla client.

HTTP status codes are translated into these classes at the request boundary;
see :func:`error_for_status`.
"""

from __future__ import annotations

from typing import Mapping, Optional

__all__ = [
    "DwollaError",
    "AuthError",
    "NetworkError",
    "SerializationError",
    "HTTPError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "PassthroughError",
    "error_for_status",
]


class DwollaError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, *, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class AuthError(DwollaError):
    """A bearer token could not be obtained."""


class NetworkError(DwollaError):
    """The request never produced an HTTP response."""


class SerializationError(DwollaError):
    """A JSON body could not be encoded or decoded."""


class HTTPError(DwollaError):
    """The API answered with a status code the operation does not accept."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.status_code = status_code
        self.body = body


class ValidationError(HTTPError):
    """400: duplicate resource or validation error."""


class AuthorizationError(HTTPError):
    """403: the credentials may not perform the operation."""


class NotFoundError(HTTPError):
    """404: the resource (or the account owning it) does not exist."""


class PassthroughError(HTTPError):
    """Any other unexpected status; the message is the raw status text."""


_STATUS_CLASSES = {
    400: ValidationError,
    403: AuthorizationError,
    404: NotFoundError,
}

_DEFAULT_MESSAGES = {
    400: "duplicate resource or validation error",
    403: "not authorized to perform this operation",
    404: "resource not found",
}


def error_for_status(
    status_code: int,
    status_text: str,
    *,
    messages: Optional[Mapping[int, str]] = None,
    body: str = "",
    operation: Optional[str] = None,
) -> HTTPError:
    """
    Build the error matching ``status_code``.

    ``messages`` maps status codes to the operation's fixed message; 400, 403
    and 404 without one get a generic message. Every other code becomes a
    :class:`PassthroughError` carrying ``status_text``.
    """
    cls = _STATUS_CLASSES.get(status_code)
    if cls is None:
        return PassthroughError(
            status_text, status_code=status_code, body=body, operation=operation
        )
    message = (messages or {}).get(status_code, _DEFAULT_MESSAGES[status_code])
    return cls(message, status_code=status_code, body=body, operation=operation)
