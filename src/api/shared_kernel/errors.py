"""Error taxonomy shared by the iam and notes bounded contexts.

Each class corresponds to one HTTP status class; presentation layers map
them with ``status_code_for`` instead of inspecting individual subclasses.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for every expected failure raised by the service core."""

    status_code: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class Unauthenticated(DomainError):
    """Missing or invalid credential, or a caller with no membership."""

    status_code = 401


class Forbidden(DomainError):
    """Caller is known but not allowed to perform the operation."""

    status_code = 403


class ValidationError(DomainError):
    """Malformed or unacceptable input."""

    status_code = 400


class NotFound(DomainError):
    """Scoped lookup matched nothing.

    Never distinguishes between "does not exist" and "belongs to someone else".
    """

    status_code = 404


class UpstreamError(DomainError):
    """An external collaborator (identity provider, database) failed."""

    status_code = 502


def status_code_for(error: DomainError) -> int:
    """Return the HTTP status code for a domain error."""
    return error.status_code
