"""Failures reported by the record store client and the edit session."""

from typing import List, Optional, Sequence


class StoreError(Exception):
    """A store call did not succeed. Base class for every client failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(StoreError):
    """Transport failure: connection refused, DNS, timeout and the like."""


class ValidationError(StoreError):
    """Field-level rejection, detected by the client or by the store."""


class NotFoundError(StoreError):
    """The id is absent at the store."""


class DraftValidationError(ValidationError):
    """Client-side validation of a draft failed.

    ``fields`` names every field that failed, in form order.
    """

    def __init__(self, message: str, fields: Sequence[str]):
        super().__init__(message)
        self.fields: List[str] = list(fields)
