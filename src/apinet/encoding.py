r"""Parameter and multipart body encoding.

Request parameters are mappings whose values are strings, integers, or
ordered lists of strings/integers. For query strings and multipart form
fields, list values are flattened into repeated ``key[]`` entries in
their original order.
"""

from __future__ import annotations

__all__ = [
    "FILE_CONTENT_TYPE",
    "FILE_FIELD_NAME",
    "EncodingMode",
    "build_file_part",
    "build_multipart_data",
    "flatten_parameters",
    "generate_boundary",
    "multipart_content_type",
]

import uuid
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

FILE_FIELD_NAME = "file"
FILE_CONTENT_TYPE = "image/jpg"
FILE_EXTENSION = ".jpg"


class EncodingMode(Enum):
    """How request parameters are placed in the request.

    Attributes:
        QUERY: Parameters are encoded in the URL query string.
        JSON: Parameters are sent as a JSON body.
        MULTIPART: Parameters are sent as multipart form fields.
    """

    QUERY = "query"
    JSON = "json"
    MULTIPART = "multipart"


def _format_scalar(name: str, value: Any) -> str:
    # bool is an int subclass but has no agreed text form on the server side
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        msg = (
            f"parameter {name!r} must be a string, an integer or a list of them, "
            f"got {type(value).__name__}"
        )
        raise TypeError(msg)
    return str(value)


def flatten_parameters(parameters: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Flatten request parameters into ordered ``(name, value)`` pairs.

    Args:
        parameters: The request parameters, or ``None``.

    Returns:
        The flattened pairs. A scalar ``k`` gives one ``(k, value)`` pair,
        a list ``k=[a, b]`` gives ``(k[], a)`` then ``(k[], b)``.

    Raises:
        TypeError: If a value is not a string, an integer, or a list or
            tuple of them.

    Example:
        ```pycon
        >>> from apinet.encoding import flatten_parameters
        >>> flatten_parameters({"page": 2, "tags": ["a", "b"]})
        [('page', '2'), ('tags[]', 'a'), ('tags[]', 'b')]

        ```
    """
    if not parameters:
        return []
    pairs: list[tuple[str, str]] = []
    for name, value in parameters.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{name}[]", _format_scalar(name, item)) for item in value)
        else:
            pairs.append((name, _format_scalar(name, value)))
    return pairs


def build_multipart_data(parameters: Mapping[str, Any] | None) -> dict[str, str | list[str]]:
    """Build the form-field mapping of a multipart body.

    Repeated names are grouped into a list so that httpx emits one part
    per element, in order.

    Args:
        parameters: The request parameters, or ``None``.

    Returns:
        A mapping from field name to its text value or list of values.

    Example:
        ```pycon
        >>> from apinet.encoding import build_multipart_data
        >>> build_multipart_data({"name": "kim", "tags": ["a", "b"]})
        {'name': 'kim', 'tags[]': ['a', 'b']}

        ```
    """
    data: dict[str, str | list[str]] = {}
    for name, value in flatten_parameters(parameters):
        if name.endswith("[]"):
            values = data.setdefault(name, [])
            values.append(value)  # type: ignore[union-attr]
        else:
            data[name] = value
    return data


def build_file_part(file_name: str, file_bytes: bytes) -> tuple[str, tuple[str, bytes, str]]:
    """Build the binary part of an upload.

    Args:
        file_name: The file name, without extension.
        file_bytes: The file content.

    Returns:
        A ``(field_name, (file_name, content, content_type))`` tuple in the
        shape httpx expects for ``files``.
    """
    return FILE_FIELD_NAME, (f"{file_name}{FILE_EXTENSION}", file_bytes, FILE_CONTENT_TYPE)


def generate_boundary() -> str:
    """Generate a fresh random multipart boundary token."""
    return f"Boundary-{uuid.uuid4().hex}"


def multipart_content_type(boundary: str) -> str:
    """Return the ``Content-Type`` header value for a multipart body.

    Example:
        ```pycon
        >>> from apinet.encoding import multipart_content_type
        >>> multipart_content_type("abc")
        'multipart/form-data; boundary=abc'

        ```
    """
    return f"multipart/form-data; boundary={boundary}"
