r"""Dispatch of side effects onto the UI-owning execution context.

Busy-indicator and alert signals are not run on the request's own task:
they are handed to a Dispatcher, which serializes them on the context
that owns the user interface.
"""

from __future__ import annotations

__all__ = ["Dispatcher", "InlineDispatcher", "LoopDispatcher"]

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable


class Dispatcher(Protocol):
    """Run callbacks on the UI-owning execution context."""

    def dispatch(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)``; never waits for it to run."""


class InlineDispatcher:
    """Run callbacks immediately in the calling context.

    Suitable when the caller already runs on the UI context, and in tests.
    """

    def dispatch(self, callback: Callable[..., Any], *args: Any) -> None:
        callback(*args)


class LoopDispatcher:
    r"""Run callbacks on an asyncio event loop that owns the UI.

    Callbacks are scheduled with ``call_soon_threadsafe`` so they can be
    dispatched from any thread and run in the order they were dispatched.

    Args:
        loop: The UI-owning event loop.

    Example:
        ```pycon
        >>> import asyncio
        >>> from apinet.dispatch import LoopDispatcher
        >>> async def main():
        ...     calls = []
        ...     dispatcher = LoopDispatcher(asyncio.get_running_loop())
        ...     dispatcher.dispatch(calls.append, "shown")
        ...     await asyncio.sleep(0)
        ...     return calls
        ...
        >>> asyncio.run(main())
        ['shown']

        ```
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def dispatch(self, callback: Callable[..., Any], *args: Any) -> None:
        self._loop.call_soon_threadsafe(callback, *args)
