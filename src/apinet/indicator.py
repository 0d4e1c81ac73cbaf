r"""Busy-indicator coordination for in-flight requests.

Every request calls ``begin_busy`` before it is sent and ``end_busy``
once its outcome is known, whatever that outcome is. Since requests
overlap, the indicator shown to the user is reference counted: it is
shown when the first request begins and hidden when the last one ends.
"""

from __future__ import annotations

__all__ = ["BusyIndicator", "CountingBusyIndicator", "NullBusyIndicator"]

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol

from apinet.dispatch import InlineDispatcher

if TYPE_CHECKING:
    from collections.abc import Iterator

    from apinet.dispatch import Dispatcher

logger: logging.Logger = logging.getLogger(__name__)


class BusyIndicator(Protocol):
    """A user-visible loading state."""

    def begin_busy(self) -> None:
        """Show the loading state."""

    def end_busy(self) -> None:
        """Hide the loading state."""


class NullBusyIndicator:
    """Busy indicator that shows nothing."""

    def begin_busy(self) -> None:
        pass

    def end_busy(self) -> None:
        pass


class CountingBusyIndicator:
    r"""Reference-counted wrapper around a BusyIndicator.

    ``begin_busy`` and ``end_busy`` may be called by any number of
    concurrent requests. The wrapped indicator only sees the first
    ``begin_busy`` (count 0 to 1) and the last ``end_busy`` (count 1 to
    0), each dispatched onto the UI-owning context.

    Args:
        indicator: The indicator to drive. If ``None``, nothing is shown
            but the count is still tracked. It must not call back into
            this object.
        dispatcher: Where the visible signals run. If ``None``, they run
            inline.

    Example:
        ```pycon
        >>> from apinet.indicator import CountingBusyIndicator
        >>> busy = CountingBusyIndicator()
        >>> busy.begin_busy()
        >>> busy.begin_busy()
        >>> busy.end_busy()
        >>> busy.is_busy
        True
        >>> busy.end_busy()
        >>> busy.is_busy
        False

        ```
    """

    def __init__(
        self,
        indicator: BusyIndicator | None = None,
        *,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._indicator = indicator if indicator is not None else NullBusyIndicator()
        self._dispatcher = dispatcher if dispatcher is not None else InlineDispatcher()
        self._count = 0
        self._lock = threading.Lock()

    @property
    def in_flight(self) -> int:
        """The number of requests currently holding the indicator."""
        with self._lock:
            return self._count

    @property
    def is_busy(self) -> bool:
        """Whether at least one request is in flight."""
        return self.in_flight > 0

    # Dispatch under the lock: signals must reach the UI in count order.

    def begin_busy(self) -> None:
        with self._lock:
            self._count += 1
            if self._count == 1:
                logger.debug("Showing busy indicator")
                self._dispatcher.dispatch(self._indicator.begin_busy)

    def end_busy(self) -> None:
        """Release one hold on the indicator.

        Raises:
            RuntimeError: If no request is holding the indicator.
        """
        with self._lock:
            if self._count == 0:
                msg = "end_busy called without a matching begin_busy"
                raise RuntimeError(msg)
            self._count -= 1
            if self._count == 0:
                logger.debug("Hiding busy indicator")
                self._dispatcher.dispatch(self._indicator.end_busy)

    @contextmanager
    def track(self) -> Iterator[None]:
        """Hold the indicator for the duration of the block.

        ``end_busy`` runs even if the block raises or its task is
        cancelled.
        """
        self.begin_busy()
        try:
            yield
        finally:
            self.end_busy()
