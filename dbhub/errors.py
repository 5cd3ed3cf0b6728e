"""
Exceptions raised by the DBHub client.

Every failure a caller can see is one of these, so "could not reach the
service" and "the service rejected the request" are told apart by type.
"""

from typing import Optional


class DBHubError(Exception):
    """Base exception for all client errors."""
    pass


class ConfigurationError(DBHubError):
    """Raised when a client is constructed with invalid settings."""
    pass


class TransportError(DBHubError):
    """
    Raised when the HTTP request itself could not complete.

    Attributes:
        cause: The exception raised by the HTTP library.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ApiError(DBHubError):
    """
    Raised when the service answers with a non-2xx status.

    Attributes:
        message: Error text supplied by the service.
        status_code: HTTP status code of the response.
    """

    def __init__(self, message: Optional[str], status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(
            f"DBHub API error message: {message} [HTTP status: {status_code}]"
        )
