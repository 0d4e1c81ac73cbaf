r"""apinet - Typed asynchronous HTTP client for a mobile backend API.

This package provides a typed async HTTP client built on top of httpx.
Every request operation returns the response body decoded into a
caller-chosen type, or raises one of three classified failures.

Key Features:
    - Typed GET, POST, PUT, DELETE and multipart upload operations
    - Response bodies decoded with pydantic into models, lists or scalars
    - Failures classified as transport, HTTP status or decode errors
    - Default JSON headers merged under caller-supplied headers
    - Fixed session timeout and per-host connection cap
    - Reference-counted busy indicator around every in-flight request
    - Failure alerts dispatched onto the UI-owning context
    - Live network reachability tracking
    - Observable upload progress

Example:
    ```pycon
    >>> import asyncio
    >>> from pydantic import BaseModel
    >>> from apinet import ApiClient, ClientConfig
    >>> class Profile(BaseModel):
    ...     id: int
    ...     nickname: str
    ...
    >>> async def main():  # doctest: +SKIP
    ...     async with ApiClient(ClientConfig.from_settings()) as client:
    ...         profile = await client.get("/profile", Profile)
    ...         await client.upload("/profile/photo", "avatar", b"...", Profile)
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientConfig",
    "CountingBusyIndicator",
    "DecodeError",
    "EncodingMode",
    "ErrorOrigin",
    "HttpMethod",
    "HttpStatusError",
    "ReachabilityMonitor",
    "ReachabilityStatus",
    "ServerDirection",
    "ServerSettings",
    "TransportError",
    "UploadProgress",
    "UploadProgressStream",
    "__version__",
    "classify_error",
    "merge_headers",
]

from importlib.metadata import PackageNotFoundError, version

from apinet.classifier import classify_error
from apinet.client import ApiClient
from apinet.core.config import ClientConfig
from apinet.core.settings import ServerDirection, ServerSettings
from apinet.encoding import EncodingMode
from apinet.exceptions import (
    ApiError,
    DecodeError,
    ErrorOrigin,
    HttpStatusError,
    TransportError,
)
from apinet.headers import merge_headers
from apinet.indicator import CountingBusyIndicator
from apinet.models import HttpMethod
from apinet.progress import UploadProgress, UploadProgressStream
from apinet.reachability import ReachabilityMonitor, ReachabilityStatus

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
