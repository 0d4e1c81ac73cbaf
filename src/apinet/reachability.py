r"""Network reachability tracking.

The ReachabilityMonitor subscribes to a source of network-status change
notifications and keeps the latest known status. It has four states:

- UNKNOWN: no notification received yet (initial state)
- UNREACHABLE: no usable network path
- REACHABLE_CELLULAR: reachable through a cellular connection
- REACHABLE_LOCAL: reachable through a local network (Wi-Fi, ethernet)

Example:
    ```pycon
    >>> from apinet.reachability import (
    ...     ManualNetworkStatusSource,
    ...     ReachabilityMonitor,
    ...     ReachabilityStatus,
    ... )
    >>> source = ManualNetworkStatusSource()
    >>> monitor = ReachabilityMonitor(source)
    >>> monitor.start()
    >>> monitor.is_usable
    False
    >>> source.emit(ReachabilityStatus.REACHABLE_LOCAL)
    >>> monitor.is_usable
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "ManualNetworkStatusSource",
    "NetworkStatusSource",
    "ReachabilityMonitor",
    "ReachabilityStatus",
]

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class ReachabilityStatus(Enum):
    """Known network reachability states."""

    UNKNOWN = "unknown"
    UNREACHABLE = "unreachable"
    REACHABLE_CELLULAR = "reachable_cellular"
    REACHABLE_LOCAL = "reachable_local"

    @property
    def is_usable(self) -> bool:
        """Whether the status describes a usable network path."""
        return self in (ReachabilityStatus.REACHABLE_CELLULAR, ReachabilityStatus.REACHABLE_LOCAL)


class NetworkStatusSource(Protocol):
    """A platform facility that reports network-status changes."""

    def subscribe(
        self, callback: Callable[[ReachabilityStatus], None]
    ) -> Callable[[], None]:
        """Register ``callback`` for status changes and return a function
        that cancels the subscription."""


class ManualNetworkStatusSource:
    """In-process network-status source driven by ``emit``.

    Hosts that receive status notifications from the platform forward
    them through ``emit``; tests use it to simulate network changes.
    """

    def __init__(self) -> None:
        self._callbacks: list[Callable[[ReachabilityStatus], None]] = []
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def subscribe(
        self, callback: Callable[[ReachabilityStatus], None]
    ) -> Callable[[], None]:
        with self._lock:
            self._callbacks.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, status: ReachabilityStatus) -> None:
        """Notify every subscriber of a new status."""
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(status)


class ReachabilityMonitor:
    r"""Track the latest known network reachability status.

    The status is only written by the subscription callback and read by
    anyone needing a pre-flight check. Thread-safe implementation using a
    lock; the last notification wins.

    Args:
        source: The source of network-status notifications.
        on_status_change: Optional callback called when the status
            changes. Receives ``(old_status, new_status)``.

    Example:
        ```pycon
        >>> from apinet.reachability import ManualNetworkStatusSource, ReachabilityMonitor
        >>> monitor = ReachabilityMonitor(ManualNetworkStatusSource())
        >>> monitor.status
        <ReachabilityStatus.UNKNOWN: 'unknown'>

        ```
    """

    def __init__(
        self,
        source: NetworkStatusSource,
        *,
        on_status_change: Callable[[ReachabilityStatus, ReachabilityStatus], None] | None = None,
    ) -> None:
        self._source = source
        self._on_status_change = on_status_change

        # State tracking (protected by lock)
        self._status = ReachabilityStatus.UNKNOWN
        self._unsubscribe: Callable[[], None] | None = None
        self._starting = False
        self._lock = threading.Lock()

    @property
    def status(self) -> ReachabilityStatus:
        """The latest known reachability status."""
        with self._lock:
            return self._status

    @property
    def is_usable(self) -> bool:
        """Whether the network is currently reachable."""
        return self.status.is_usable

    @property
    def is_running(self) -> bool:
        """Whether the monitor is subscribed to its source."""
        with self._lock:
            return self._unsubscribe is not None

    def start(self) -> None:
        """Subscribe to the status source.

        Calling ``start`` on a running monitor does nothing.
        """
        with self._lock:
            if self._starting or self._unsubscribe is not None:
                return
            self._starting = True
        # The source may report the current status from inside subscribe,
        # so the lock must not be held here.
        try:
            unsubscribe = self._source.subscribe(self._handle_status)
        except Exception:
            with self._lock:
                self._starting = False
            raise
        with self._lock:
            self._unsubscribe = unsubscribe
            self._starting = False
        logger.debug("Reachability monitor started")

    def stop(self) -> None:
        """Cancel the subscription. The last known status is kept."""
        with self._lock:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            logger.debug("Reachability monitor stopped")

    def _handle_status(self, status: ReachabilityStatus) -> None:
        with self._lock:
            old_status, self._status = self._status, status
        if old_status is status:
            return
        logger.info(f"Network reachability changed: {old_status.value} -> {status.value}")
        if self._on_status_change is not None:
            self._on_status_change(old_status, status)
