r"""Asynchronous typed API client.

This module provides the ApiClient, an async context manager owning one
httpx.AsyncClient configured with the session timeout and connection
cap. Every operation builds a RequestDescriptor, sends it, and returns
the response body decoded into the requested type, or raises an
ApiError subclass.

Around every request the client:

- logs the method, path, headers and parameters before sending;
- holds the busy indicator from just before the send until the outcome
  is known, including on failure and cancellation;
- logs the raw response headers and body text before decoding;
- reports transport and HTTP status failures to the alert surface.
"""

from __future__ import annotations

__all__ = ["ApiClient"]

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import TypeAdapter

from apinet.alerts import AlertNotifier
from apinet.classifier import classify_error, is_success_status
from apinet.dispatch import InlineDispatcher
from apinet.encoding import (
    EncodingMode,
    build_file_part,
    build_multipart_data,
    flatten_parameters,
    generate_boundary,
    multipart_content_type,
)
from apinet.headers import merge_headers
from apinet.indicator import CountingBusyIndicator
from apinet.models import HttpMethod, RequestDescriptor, ResponseEnvelope
from apinet.progress import ProgressByteStream
from apinet.utils.log import LogEventType, log_event

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    from apinet.alerts import AlertSurface
    from apinet.core.config import ClientConfig
    from apinet.dispatch import Dispatcher
    from apinet.exceptions import ApiError
    from apinet.indicator import BusyIndicator
    from apinet.progress import UploadProgressStream
    from apinet.reachability import ReachabilityMonitor

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def _type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _decode(response_type: type[T], response: httpx.Response) -> T:
    if response_type is bytes:
        return response.content  # type: ignore[return-value]
    return _type_adapter(response_type).validate_json(response.content)


def _set_content_type(headers: dict[str, str], value: str) -> None:
    for key in [key for key in headers if key.lower() == "content-type"]:
        del headers[key]
    headers["Content-Type"] = value


class ApiClient:
    r"""Asynchronous context manager for typed API requests.

    Args:
        config: The session configuration.
        indicator: Optional busy indicator shown while requests are in
            flight. It is wrapped in a CountingBusyIndicator unless it
            already is one.
        alerts: Optional alert surface for transport and HTTP status
            failures.
        dispatcher: Where indicator and alert signals run. If ``None``,
            they run inline.
        reachability: Optional reachability monitor backing
            ``is_reachable``.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from pydantic import BaseModel
        >>> from apinet import ApiClient, ClientConfig
        >>> class User(BaseModel):
        ...     id: int
        ...     name: str
        ...
        >>> async def main():  # doctest: +SKIP
        ...     config = ClientConfig(base_url="https://api.example.com")
        ...     async with ApiClient(config) as client:
        ...         user = await client.get("/users/1", User)
        ...         users = await client.get("/users", list[User], parameters={"page": 2})
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        indicator: BusyIndicator | None = None,
        alerts: AlertSurface | None = None,
        dispatcher: Dispatcher | None = None,
        reachability: ReachabilityMonitor | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        dispatcher = dispatcher if dispatcher is not None else InlineDispatcher()
        if isinstance(indicator, CountingBusyIndicator):
            self._indicator = indicator
        else:
            self._indicator = CountingBusyIndicator(indicator, dispatcher=dispatcher)
        self._alerts = AlertNotifier(alerts, dispatcher=dispatcher, title=config.alert_title)
        self._reachability = reachability
        self._transport = transport

        # Client will be created when entering context
        self._client: httpx.AsyncClient | None = None
        self._entered = False

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def indicator(self) -> CountingBusyIndicator:
        """The counted busy indicator shared by all requests."""
        return self._indicator

    @property
    def is_reachable(self) -> bool:
        """Whether the network is usable, according to the attached
        reachability monitor. ``False`` if no monitor is attached."""
        if self._reachability is None:
            return False
        return self._reachability.is_usable

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the underlying
        httpx client.

        Returns:
            The ApiClient instance for making requests.
        """
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.timeout),
            limits=httpx.Limits(max_connections=self._config.max_connections_per_host),
            transport=self._transport,
        )
        self._entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._entered = False

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the client is available for use.

        Raises:
            RuntimeError: If the client is used outside of a context manager.
        """
        if not self._entered or self._client is None:
            msg = "ApiClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._client

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        response_type: type[T],
        *,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        encoding: EncodingMode | None = None,
    ) -> T:
        r"""Send a request and decode the response body.

        Args:
            method: ``GET``, ``POST``, ``PUT`` or ``DELETE``.
            path: The path, resolved against the configured base URL.
            response_type: The type the body is decoded into, e.g. a
                pydantic model or ``list[Model]``. ``bytes`` returns the
                raw body.
            parameters: Optional parameters. Values are strings, integers,
                or lists of them when query-encoded.
            headers: Optional headers, merged over the default headers.
            encoding: How parameters are sent. Defaults to the query
                string for GET and a JSON body otherwise.

        Returns:
            The decoded response body.

        Raises:
            RuntimeError: If called outside of a context manager.
            TransportError: If no response was obtained.
            HttpStatusError: If the status is outside 200-299.
            DecodeError: If the body does not match ``response_type``.
        """
        method = HttpMethod(method.upper()) if isinstance(method, str) else method
        if method is HttpMethod.UPLOAD:
            msg = "use ApiClient.upload() to send multipart uploads"
            raise ValueError(msg)
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            response_type=response_type,
            parameters=parameters,
            headers=merge_headers(headers, self._config.default_headers),
            encoding=encoding,
        )
        envelope = await self.send(descriptor)
        return envelope.value

    async def get(self, path: str, response_type: type[T], **kwargs: Any) -> T:
        """Send a GET request (see request() method)."""
        return await self.request(HttpMethod.GET, path, response_type, **kwargs)

    async def post(self, path: str, response_type: type[T], **kwargs: Any) -> T:
        """Send a POST request (see request() method)."""
        return await self.request(HttpMethod.POST, path, response_type, **kwargs)

    async def put(self, path: str, response_type: type[T], **kwargs: Any) -> T:
        """Send a PUT request (see request() method)."""
        return await self.request(HttpMethod.PUT, path, response_type, **kwargs)

    async def delete(self, path: str, response_type: type[T], **kwargs: Any) -> T:
        """Send a DELETE request (see request() method)."""
        return await self.request(HttpMethod.DELETE, path, response_type, **kwargs)

    async def upload(
        self,
        path: str,
        file_name: str,
        file_bytes: bytes,
        response_type: type[T],
        *,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        progress: UploadProgressStream | None = None,
    ) -> T:
        r"""Upload a file as a multipart POST and decode the response.

        Each scalar parameter becomes one text part; each element of a
        list parameter ``k`` becomes a part named ``k[]``. The file is
        sent as the part ``file`` named ``<file_name>.jpg`` with the
        ``image/jpg`` content type. A new boundary is generated for every
        call.

        Args:
            path: The path, resolved against the configured base URL.
            file_name: The file name, without extension.
            file_bytes: The file content.
            response_type: The type the body is decoded into.
            parameters: Optional form fields.
            headers: Optional headers. ``Content-Type`` is always replaced
                by the multipart content type.
            progress: Optional stream receiving progress snapshots. It is
                closed when the upload completes or fails.

        Returns:
            The decoded response body.

        Raises:
            RuntimeError: If called outside of a context manager.
            TransportError: If no response was obtained.
            HttpStatusError: If the status is outside 200-299.
            DecodeError: If the body does not match ``response_type``.
        """
        final_headers = merge_headers(headers, self._config.default_headers)
        _set_content_type(final_headers, multipart_content_type(generate_boundary()))
        descriptor = RequestDescriptor(
            method=HttpMethod.UPLOAD,
            path=path,
            response_type=response_type,
            parameters=parameters,
            headers=final_headers,
            file_name=file_name,
            file_bytes=file_bytes,
        )
        envelope = await self.send(descriptor, progress=progress)
        return envelope.value

    async def fetch_raw(self, path: str) -> bytes:
        """Fetch the raw body of a GET request.

        Args:
            path: The path, resolved against the configured base URL.

        Returns:
            The response body.

        Raises:
            RuntimeError: If called outside of a context manager.
            TransportError: If no response was obtained.
            HttpStatusError: If the status is outside 200-299.
        """
        envelope = await self.send(RequestDescriptor(HttpMethod.GET, path, bytes))
        return envelope.value

    def _build_request(
        self, client: httpx.AsyncClient, descriptor: RequestDescriptor[T]
    ) -> httpx.Request:
        kwargs: dict[str, Any] = {"headers": dict(descriptor.headers)}
        parameters = descriptor.parameters
        if descriptor.encoding is EncodingMode.MULTIPART:
            kwargs["data"] = build_multipart_data(parameters)
            kwargs["files"] = [build_file_part(descriptor.file_name, descriptor.file_bytes)]
        elif parameters:
            if descriptor.encoding is EncodingMode.QUERY:
                kwargs["params"] = flatten_parameters(parameters)
            else:
                kwargs["json"] = dict(parameters)
        return client.build_request(descriptor.method.verb, descriptor.path, **kwargs)

    def _fail(self, error: ApiError) -> ApiError:
        log_event(logger, f"error - {error.message}", LogEventType.ERROR, stacklevel=2)
        self._alerts.notify(error)
        return error

    async def send(
        self,
        descriptor: RequestDescriptor[T],
        *,
        progress: UploadProgressStream | None = None,
    ) -> ResponseEnvelope[T]:
        r"""Send a prepared request and return its response envelope.

        Args:
            descriptor: The request to send. Its headers are sent as is.
            progress: Optional stream receiving upload progress snapshots.

        Returns:
            The raw response and the decoded value.

        Raises:
            RuntimeError: If called outside of a context manager.
            TransportError: If no response was obtained.
            HttpStatusError: If the status is outside 200-299.
            DecodeError: If the body does not match the response type.
        """
        client = self._ensure_client()
        method = descriptor.method.verb
        try:
            request = self._build_request(client, descriptor)
            url = str(request.url)
            if progress is not None:
                total = request.headers.get("Content-Length")
                request.stream = ProgressByteStream(
                    request.stream,  # type: ignore[arg-type]
                    int(total) if total is not None else None,
                    progress,
                )
            log_event(logger, descriptor.describe())

            with self._indicator.track():
                try:
                    response = await client.send(request)
                except httpx.HTTPError as exc:
                    raise self._fail(classify_error(exc, method=method, url=url)) from exc

                logger.debug(f"response {response.headers.multi_items()}")
                if descriptor.response_type is bytes:
                    body = None
                    logger.debug(f"result bytes: {len(response.content)}")
                else:
                    body = response.text
                    logger.debug(f"result String\n======\n{body}\n------")

                if not is_success_status(response.status_code):
                    raise self._fail(
                        classify_error(None, method=method, url=url, response=response, body=body)
                    )
                try:
                    value = _decode(descriptor.response_type, response)
                except ValueError as exc:
                    raise self._fail(
                        classify_error(exc, method=method, url=url, response=response, body=body)
                    ) from exc
        finally:
            if progress is not None:
                progress.close()

        logger.debug(f"decoded {value!r}")
        return ResponseEnvelope(
            status_code=response.status_code,
            headers=httpx.Headers(response.headers),
            body=response.content,
            value=value,
        )
