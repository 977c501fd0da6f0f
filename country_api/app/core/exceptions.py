"""
Exception hierarchy shared by repositories, services and routers.

Services raise these errors; the API layer maps them onto HTTP status
codes and response bodies.
"""

from typing import Iterable, List, Optional


class CountryApiError(Exception):
    """Base class for all errors raised by the service layer."""


class ValidationError(CountryApiError):
    """Input is malformed or misses required attributes."""

    def __init__(self, message: str, errors: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.errors: List[str] = list(errors) if errors is not None else [message]


class NotFoundError(CountryApiError):
    """A referenced identifier does not exist."""


class DataIntegrityError(CountryApiError):
    """Stored data violates a repository invariant.

    Raised when a neighbor relation points at a country that no longer
    exists.  This is a server-side fault, not a bad request.
    """


class StorageError(CountryApiError):
    """The record store is unreachable or rejected the operation."""
