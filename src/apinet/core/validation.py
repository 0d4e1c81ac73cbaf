r"""Parameter validation utilities for the API client.

This module provides validation functions for session configuration
values and request arguments so that invalid input fails before any
network activity happens.
"""

from __future__ import annotations

__all__ = [
    "validate_base_url",
    "validate_max_connections",
    "validate_path",
    "validate_timeout",
]


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from apinet.core.validation import validate_timeout
        >>> validate_timeout(20.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_max_connections(max_connections: int) -> None:
    """Validate the per-host connection cap.

    Args:
        max_connections: Maximum number of concurrent connections to
            the API host. Must be >= 1.

    Raises:
        ValueError: If max_connections is < 1.
    """
    if max_connections < 1:
        msg = f"max_connections_per_host must be >= 1, got {max_connections}"
        raise ValueError(msg)


def validate_base_url(base_url: str) -> None:
    """Validate the base URL requests are resolved against.

    Args:
        base_url: An absolute ``http`` or ``https`` URL.

    Raises:
        ValueError: If base_url is empty or not an http(s) URL.

    Example:
        ```pycon
        >>> from apinet.core.validation import validate_base_url
        >>> validate_base_url("https://api.example.com")

        ```
    """
    if not base_url.startswith(("http://", "https://")):
        msg = f"base_url must be an absolute http(s) URL, got {base_url!r}"
        raise ValueError(msg)


def validate_path(path: str) -> None:
    """Validate a request path.

    Args:
        path: The path of the request, relative to the base URL.
            Must be non-empty.

    Raises:
        ValueError: If path is empty or only whitespace.
    """
    if not path or not path.strip():
        msg = f"path must be a non-empty string, got {path!r}"
        raise ValueError(msg)
