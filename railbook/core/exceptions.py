"""
Client error taxonomy.

- ValidationError: caught before any request is built
- ApiError: the server (or the network) refused the operation
- RedirectRequired / AuthorizationError: the session cannot be used for the
  current view; the front end navigates to `location`
"""

from typing import Any, Optional

ENTRY_POINT = "/"


class RailbookError(Exception):
    """Base class for all client errors."""


class ValidationError(RailbookError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(RailbookError):
    def __init__(self, status_code: Optional[int], detail: Any = None):
        super().__init__(f"API error {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    def user_message(self, fallback: str) -> str:
        """Server-supplied detail when it is a plain message, else the fallback."""
        if isinstance(self.detail, str) and self.detail.strip():
            return self.detail
        return fallback


class RedirectRequired(RailbookError):
    def __init__(self, location: str = ENTRY_POINT, reason: str = ""):
        super().__init__(reason or f"redirect to {location}")
        self.location = location
        self.reason = reason


class AuthorizationError(RedirectRequired):
    """
    A bearer-token call came back 401.
    By the time this is raised the session guard has already torn the
    session down.
    """

    status_code = 401

    def __init__(self, detail: Any = None):
        super().__init__(ENTRY_POINT, reason="unauthorized")
        self.detail = detail


class BookingInProgressError(RailbookError):
    """A submission is already outstanding for this form."""


class InvalidTransitionError(RailbookError):
    def __init__(self, operation: str, state: str):
        super().__init__(f"cannot {operation} while {state}")
        self.operation = operation
        self.state = state
