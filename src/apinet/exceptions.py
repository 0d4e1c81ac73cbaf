r"""Exceptions raised by the API client.

Every failed request raises exactly one ApiError subclass:

- TransportError: no HTTP response was obtained (timeout, DNS failure,
  connection refused).
- HttpStatusError: a response was obtained with a status outside 200-299.
- DecodeError: a 2xx response whose body does not match the expected type.
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "DecodeError",
    "ErrorOrigin",
    "HttpStatusError",
    "TransportError",
]

from enum import Enum


class ErrorOrigin(Enum):
    """The layer a request failure originated from.

    Attributes:
        TRANSPORT: The transport failed before a response was obtained.
        HTTP_STATUS: The server answered with a non-2xx status.
        DECODE: The body of a 2xx response could not be decoded.
    """

    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


class ApiError(RuntimeError):
    r"""Base class of all request failures.

    Args:
        message: A human-readable description of the failure.
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        origin: The layer the failure originated from.
        status_code: The HTTP status code, if a response was obtained.
        body: The raw response body text, if one was received.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from apinet.exceptions import ErrorOrigin, TransportError
        >>> error = TransportError(
        ...     "GET request to https://api.example.com/users timed out",
        ...     method="GET",
        ...     url="https://api.example.com/users",
        ... )
        >>> error.origin
        <ErrorOrigin.TRANSPORT: 'transport'>
        >>> error.alertable
        True

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        origin: ErrorOrigin,
        status_code: int | None = None,
        body: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url
        self.origin = origin
        self.status_code = status_code
        self.body = body
        self.cause = cause

    @property
    def alertable(self) -> bool:
        """Whether the failure should be shown to the user.

        Decode failures are contract mismatches between client and
        server and are never shown.
        """
        return self.origin is not ErrorOrigin.DECODE

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )


class TransportError(ApiError):
    """Raised when no HTTP response could be obtained."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            message, method=method, url=url, origin=ErrorOrigin.TRANSPORT, cause=cause
        )


class HttpStatusError(ApiError):
    """Raised when the server answers with a status outside 200-299.

    Args:
        server_message: The error message found in the server's error
            payload, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int,
        body: str | None = None,
        server_message: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            message,
            method=method,
            url=url,
            origin=ErrorOrigin.HTTP_STATUS,
            status_code=status_code,
            body=body,
            cause=cause,
        )
        self.server_message = server_message


class DecodeError(ApiError):
    """Raised when a 2xx response body does not match the expected type."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int | None = None,
        body: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            message,
            method=method,
            url=url,
            origin=ErrorOrigin.DECODE,
            status_code=status_code,
            body=body,
            cause=cause,
        )
