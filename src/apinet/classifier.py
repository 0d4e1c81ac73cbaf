r"""Classification of request failures into ApiError kinds.

The classifier is a total mapping: it never raises, and every failure
observed by the client ends up as exactly one of TransportError,
HttpStatusError or DecodeError.
"""

from __future__ import annotations

__all__ = ["classify_error", "extract_server_message", "is_success_status"]

import json

import httpx
import pydantic

from apinet.exceptions import ApiError, DecodeError, HttpStatusError, TransportError

# Keys checked, in order, for a message in a JSON error payload
SERVER_MESSAGE_KEYS = ("message", "error", "detail")


def is_success_status(status_code: int) -> bool:
    """Return whether a status code is in the 200-299 success range."""
    return 200 <= status_code < 300


def extract_server_message(body: str | None) -> str | None:
    """Extract the error message from a server error payload.

    Args:
        body: The raw response body text.

    Returns:
        The first string found under ``message``, ``error`` or ``detail``
        in a JSON object body, or ``None``.

    Example:
        ```pycon
        >>> from apinet.classifier import extract_server_message
        >>> extract_server_message('{"message": "user not found"}')
        'user not found'
        >>> extract_server_message("not json") is None
        True

        ```
    """
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    for key in SERVER_MESSAGE_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _response_text(response: httpx.Response) -> str | None:
    try:
        return response.text
    except httpx.ResponseNotRead:
        return None


def classify_error(
    exc: BaseException | None,
    *,
    method: str,
    url: str,
    response: httpx.Response | None = None,
    body: str | None = None,
) -> ApiError:
    """Map a request failure to its ApiError kind.

    Args:
        exc: The raw failure, or ``None`` when the failure is a non-2xx
            ``response`` without an exception.
        method: The HTTP method of the request.
        url: The URL of the request.
        response: The HTTP response, if one was obtained.
        body: The raw response body text, if it was already captured.

    Returns:
        - ``exc`` itself if it is already an ApiError;
        - an HttpStatusError if a response with a non-2xx status is
          available (directly or through ``httpx.HTTPStatusError``);
        - a DecodeError for a validation or parse failure after a 2xx
          response;
        - a TransportError otherwise.

    Example:
        ```pycon
        >>> import httpx
        >>> from apinet.classifier import classify_error
        >>> error = classify_error(
        ...     httpx.ConnectError("connection refused"),
        ...     method="GET",
        ...     url="https://api.example.com/users",
        ... )
        >>> type(error).__name__
        'TransportError'

        ```
    """
    if isinstance(exc, ApiError):
        return exc

    if isinstance(exc, httpx.HTTPStatusError) and response is None:
        response = exc.response

    if response is not None:
        if body is None:
            body = _response_text(response)
        if not is_success_status(response.status_code):
            server_message = extract_server_message(body)
            message = f"{method} request to {url} failed with status {response.status_code}"
            if server_message:
                message = f"{message}: {server_message}"
            return HttpStatusError(
                message,
                method=method,
                url=url,
                status_code=response.status_code,
                body=body,
                server_message=server_message,
                cause=exc,
            )
        if isinstance(exc, (pydantic.ValidationError, ValueError)):
            return DecodeError(
                f"{method} response from {url} could not be decoded: {exc}",
                method=method,
                url=url,
                status_code=response.status_code,
                body=body,
                cause=exc,
            )

    if isinstance(exc, httpx.TimeoutException):
        message = f"{method} request to {url} timed out"
    elif exc is None:
        message = f"{method} request to {url} failed"
    else:
        message = f"{method} request to {url} failed: {type(exc).__name__}: {exc}"
    return TransportError(message, method=method, url=url, cause=exc)
