"""
Client Exceptions

Every failure surfaced by the Ionomy client is one of three kinds:

    ValidationError - a required field is missing or invalid; raised before
                      any network I/O takes place
    ApiError        - the HTTP round trip succeeded but the response envelope
                      reports ``success: false``
    TransportError  - the HTTP call itself failed (connection error, timeout,
                      malformed or non-JSON body)

All three derive from IonomyError so callers can catch the whole family at once,
or branch on the concrete type.
"""

from typing import Any, Optional


class IonomyError(Exception):
    """Base class for all errors raised by the Ionomy client."""


class ValidationError(IonomyError, ValueError):
    """
    Raised when a caller omits a required field or supplies an invalid value.

    Attributes:
        field: Wire name of the offending parameter (e.g. "market", "orderId")
    """

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class ApiError(IonomyError):
    """
    Raised when the exchange answers with ``{"success": false, ...}``.

    Attributes:
        message: Server-supplied message, verbatim
        status_code: HTTP status of the response
        payload: Decoded response body
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class TransportError(IonomyError):
    """
    Raised when the HTTP request could not be completed or decoded.

    Attributes:
        cause: Underlying exception, if any
        status_code: HTTP status when a response was received
    """

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.status_code = status_code
