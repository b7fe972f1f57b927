"""
Client error taxonomy.

Every failure a repository can surface derives from ``ClientError``.
Local form validation never raises; it lives in form state.
"""

from typing import Optional


class ClientError(RuntimeError):
    """Base class for data layer failures."""


class UnauthenticatedError(ClientError):
    """Raised when an authenticated call is attempted without a token."""

    def __init__(self, message: str = "User not authenticated") -> None:
        super().__init__(message)


class NetworkError(ClientError):
    """Raised when the request never produced an HTTP response."""


class RejectedError(ClientError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)


class DecodeError(ClientError):
    """Raised when a response body does not match the expected shape."""
