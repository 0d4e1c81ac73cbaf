r"""Failure alerts shown to the user.

Transport and HTTP status failures are reported to an alert surface with
a title embedding the HTTP status, if any. Decode failures are never
reported. Delivery is fire-and-forget: it runs on the UI-owning context
and its own failures are only logged.
"""

from __future__ import annotations

__all__ = ["AlertNotifier", "AlertSurface", "format_alert_title"]

import logging
from typing import TYPE_CHECKING, Protocol

from apinet.dispatch import InlineDispatcher

if TYPE_CHECKING:
    from apinet.dispatch import Dispatcher
    from apinet.exceptions import ApiError

logger: logging.Logger = logging.getLogger(__name__)


class AlertSurface(Protocol):
    """Something that can show a failure to the user."""

    def show_failure(self, title: str, message: str) -> None:
        """Show a failure with a title and a message."""


def format_alert_title(title: str, status_code: int | None) -> str:
    """Build the alert title for a failure.

    Example:
        ```pycon
        >>> from apinet.alerts import format_alert_title
        >>> format_alert_title("Network error", 404)
        'Network error (404)'
        >>> format_alert_title("Network error", None)
        'Network error'

        ```
    """
    if status_code is None:
        return title
    return f"{title} ({status_code})"


class AlertNotifier:
    """Report request failures to an alert surface.

    Args:
        surface: The alert surface. If ``None``, alerts are only logged.
        dispatcher: Where ``show_failure`` runs. If ``None``, it runs
            inline.
        title: The title prefix of every alert.
    """

    def __init__(
        self,
        surface: AlertSurface | None = None,
        *,
        dispatcher: Dispatcher | None = None,
        title: str = "Network error",
    ) -> None:
        self._surface = surface
        self._dispatcher = dispatcher if dispatcher is not None else InlineDispatcher()
        self._title = title

    def notify(self, error: ApiError) -> None:
        """Show ``error`` to the user if it is alertable.

        Args:
            error: The classified request failure.
        """
        if not error.alertable:
            return
        title = format_alert_title(self._title, error.status_code)
        logger.debug(f"Dispatching failure alert {title!r}: {error.message}")
        if self._surface is None:
            return
        self._dispatcher.dispatch(self._deliver, title, error.message)

    def _deliver(self, title: str, message: str) -> None:
        try:
            self._surface.show_failure(title, message)  # type: ignore[union-attr]
        except Exception:
            logger.exception(f"Failed to show failure alert {title!r}")
