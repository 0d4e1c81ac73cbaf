r"""Request and response data structures.

A RequestDescriptor is built for every call and never shared; a
ResponseEnvelope holds the raw response of one successful request
together with its decoded value.
"""

from __future__ import annotations

__all__ = ["HttpMethod", "RequestDescriptor", "ResponseEnvelope"]

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from apinet.core.validation import validate_path
from apinet.encoding import EncodingMode

if TYPE_CHECKING:
    from collections.abc import Mapping

T = TypeVar("T")


class HttpMethod(str, Enum):
    """Request operations supported by the client.

    UPLOAD is a multipart POST.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    UPLOAD = "UPLOAD"

    @property
    def verb(self) -> str:
        """The HTTP verb sent on the wire."""
        return "POST" if self is HttpMethod.UPLOAD else self.value

    @property
    def default_encoding(self) -> EncodingMode:
        """How parameters are encoded when the caller does not say."""
        if self is HttpMethod.GET:
            return EncodingMode.QUERY
        if self is HttpMethod.UPLOAD:
            return EncodingMode.MULTIPART
        return EncodingMode.JSON


@dataclass(frozen=True)
class RequestDescriptor(Generic[T]):
    r"""Everything needed to send one request and decode its response.

    Args:
        method: The request operation.
        path: The path, resolved against the client's base URL.
            Must be non-empty.
        response_type: The type the response body is decoded into.
            ``bytes`` returns the raw body.
        parameters: Optional request parameters.
        headers: The final request headers.
        encoding: How parameters are encoded. Defaults to the method's
            default encoding.
        file_name: Name of the uploaded file, for uploads.
        file_bytes: Content of the uploaded file, for uploads.

    Raises:
        ValueError: If the path is empty, or if the encoding does not fit
            the method.

    Example:
        ```pycon
        >>> from apinet.models import HttpMethod, RequestDescriptor
        >>> descriptor = RequestDescriptor(HttpMethod.GET, "/users", dict)
        >>> descriptor.encoding
        <EncodingMode.QUERY: 'query'>

        ```
    """

    method: HttpMethod
    path: str
    response_type: type[T]
    parameters: Mapping[str, Any] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    encoding: EncodingMode | None = None
    file_name: str | None = None
    file_bytes: bytes | None = None

    def __post_init__(self) -> None:
        validate_path(self.path)
        encoding = self.encoding if self.encoding is not None else self.method.default_encoding
        if (encoding is EncodingMode.MULTIPART) != (self.method is HttpMethod.UPLOAD):
            msg = f"{self.method.value} requests cannot use {encoding.value} encoding"
            raise ValueError(msg)
        if self.method is HttpMethod.UPLOAD and (self.file_name is None or self.file_bytes is None):
            msg = "UPLOAD requests require file_name and file_bytes"
            raise ValueError(msg)
        object.__setattr__(self, "encoding", encoding)
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if self.parameters is not None:
            object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def describe(self) -> str:
        """Return the multi-line trace logged before the request is sent."""
        lines = [
            f"Method: {self.method.value}",
            f"path: {self.path}",
            f"header: {dict(self.headers)}",
            f"params: {dict(self.parameters) if self.parameters is not None else None}",
        ]
        if self.file_bytes is not None:
            lines.append(f"file: {self.file_name} ({len(self.file_bytes)} bytes)")
        return "\n" + "\n".join(lines)


@dataclass(frozen=True)
class ResponseEnvelope(Generic[T]):
    """The raw response of a successful request and its decoded value.

    Attributes:
        status_code: The HTTP status code.
        headers: The response headers. Repeated header names keep every
            value (``headers.get_list("set-cookie")``).
        body: The raw response body.
        value: The body decoded into the requested type.
    """

    status_code: int
    headers: Mapping[str, str]
    body: bytes
    value: T
