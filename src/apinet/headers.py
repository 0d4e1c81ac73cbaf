r"""Header policy for outgoing API requests.

Caller-supplied headers always win; the default ``Accept`` and
``Content-Type`` headers are only added for keys the caller did not set.
Keys are compared case-insensitively, as HTTP header names are.
"""

from __future__ import annotations

__all__ = ["merge_headers"]

from typing import TYPE_CHECKING

from apinet.core.config import DEFAULT_HEADERS

if TYPE_CHECKING:
    from collections.abc import Mapping


def merge_headers(
    headers: Mapping[str, str] | None = None,
    defaults: Mapping[str, str] = DEFAULT_HEADERS,
) -> dict[str, str]:
    """Merge caller headers over the default header set.

    Args:
        headers: Optional caller-supplied headers. Their keys and values
            are kept as given.
        defaults: The default headers to fill in for missing keys.

    Returns:
        A new dictionary with the final header set. The inputs are not
        modified.

    Example:
        ```pycon
        >>> from apinet.headers import merge_headers
        >>> merge_headers()
        {'Accept': 'application/json', 'Content-Type': 'application/json'}
        >>> merge_headers({"content-type": "text/plain"})
        {'content-type': 'text/plain', 'Accept': 'application/json'}

        ```
    """
    merged = dict(headers) if headers else {}
    present = {key.lower() for key in merged}
    for key, value in defaults.items():
        if key.lower() not in present:
            merged[key] = value
            present.add(key.lower())
    return merged
