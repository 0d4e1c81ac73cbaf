r"""Upload progress reporting.

An UploadProgressStream is a lazy, single-use asynchronous sequence of
UploadProgress snapshots. The upload pushes snapshots into it without
ever waiting for a consumer, so reading it is optional.

Example:
    ```pycon
    >>> import asyncio
    >>> from apinet.progress import UploadProgress, UploadProgressStream
    >>> async def main():
    ...     progress = UploadProgressStream()
    ...     progress.report(UploadProgress(completed=5, total=10))
    ...     progress.close()
    ...     return [snapshot.fraction async for snapshot in progress]
    ...
    >>> asyncio.run(main())
    [0.5]

    ```
"""

from __future__ import annotations

__all__ = ["ProgressByteStream", "UploadProgress", "UploadProgressStream"]

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)

_DONE = object()


@dataclass(frozen=True)
class UploadProgress:
    """A snapshot of an upload's progress.

    Attributes:
        completed: Number of body bytes sent so far.
        total: Total number of body bytes, if known.
    """

    completed: int
    total: int | None

    @property
    def fraction(self) -> float | None:
        """The completed fraction in ``[0, 1]``, if the total is known."""
        if not self.total:
            return None
        return min(self.completed / self.total, 1.0)


class UploadProgressStream:
    """Single-use async iterator over the progress of one upload.

    Iteration ends once the upload completes or fails. The stream cannot
    be iterated a second time.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False
        self._exhausted = False
        self._iterated = False

    @property
    def closed(self) -> bool:
        return self._closed

    def report(self, snapshot: UploadProgress) -> None:
        """Record a snapshot. Never blocks; ignored once closed."""
        if self._closed:
            return
        self._queue.put_nowait(snapshot)

    def close(self) -> None:
        """Mark the upload as finished."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_DONE)

    def __aiter__(self) -> Self:
        if self._iterated:
            msg = "UploadProgressStream can only be iterated once"
            raise RuntimeError(msg)
        self._iterated = True
        return self

    async def __anext__(self) -> UploadProgress:
        if self._exhausted:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _DONE:
            self._exhausted = True
            raise StopAsyncIteration
        return item  # type: ignore[return-value]


class ProgressByteStream(httpx.AsyncByteStream):
    """Request body stream that reports the number of bytes sent.

    Args:
        stream: The encoded request body.
        total: The body length, if known.
        progress: Where snapshots are reported.
    """

    def __init__(
        self,
        stream: httpx.AsyncByteStream,
        total: int | None,
        progress: UploadProgressStream,
    ) -> None:
        self._stream = stream
        self._total = total
        self._progress = progress

    async def __aiter__(self) -> AsyncIterator[bytes]:
        completed = 0
        async for chunk in self._stream:
            completed += len(chunk)
            snapshot = UploadProgress(completed=completed, total=self._total)
            logger.debug(f"Upload progress: {completed}/{self._total} bytes")
            self._progress.report(snapshot)
            yield chunk

    async def aclose(self) -> None:
        await self._stream.aclose()
