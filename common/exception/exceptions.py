"""
Exceptions raised by the InfluxDB V3 management API client.

Status errors keep the HTTP status code and, when the server sent one, the
decoded error body so the provider layer can report it verbatim.
"""

from typing import Optional


class InfluxDB3Error(Exception):
    """Base class for every management API failure."""

    pass


class UnexpectedStatusError(InfluxDB3Error):
    """Raised when the API answers with a status other than the expected one."""

    def __init__(
        self,
        status_code: int,
        error_code: Optional[int] = None,
        error_message: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(message or f"unexpected status code: {status_code}")


class BadRequestError(UnexpectedStatusError):
    """Raised when the API rejects the request body (HTTP 400)."""

    pass


class NotFoundError(UnexpectedStatusError):
    """Raised when the requested database or token does not exist."""

    pass
