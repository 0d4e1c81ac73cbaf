r"""Leveled console logging for API traffic.

This module provides the log event types used for API traffic traces and
a formatter that renders records as one console line with a timestamp, a
marker for the event type, and the source location of the call:

    2024-05-01 12:00:00.123 💬 [client.py]:210 _send -> Method: GET ...

The formatter is opt-in and can be enabled by configuring Python's
logging system:

    ```python
    import logging
    from apinet.utils.log import TraceFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(TraceFormatter())

    logger = logging.getLogger("apinet")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = ["LogEventType", "TraceFormatter", "log_event"]

import logging
from enum import Enum


class LogEventType(Enum):
    """Kinds of log events, each with a logging level and a marker.

    Attributes:
        ERROR: A failure.
        INFO: Informational output.
        TRACE: Routine trace output.
        HOT: Something important to look at.
    """

    ERROR = (logging.ERROR, "‼️")
    INFO = (logging.INFO, "ℹ️")
    TRACE = (logging.DEBUG, "💬")
    HOT = (logging.WARNING, "🔥")

    @property
    def level(self) -> int:
        return self.value[0]

    @property
    def marker(self) -> str:
        return self.value[1]

    @classmethod
    def from_level(cls, level: int) -> LogEventType:
        """Return the event type matching a logging level.

        Example:
            ```pycon
            >>> import logging
            >>> from apinet.utils.log import LogEventType
            >>> LogEventType.from_level(logging.INFO)
            <LogEventType.INFO: (20, 'ℹ️')>

            ```
        """
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.HOT
        if level >= logging.INFO:
            return cls.INFO
        return cls.TRACE


def log_event(
    logger: logging.Logger,
    message: str,
    event_type: LogEventType = LogEventType.TRACE,
    *,
    stacklevel: int = 1,
) -> None:
    """Log ``message`` as an event of the given type.

    The record's source location is the caller of ``log_event`` (or a
    frame further up with ``stacklevel``).

    Args:
        logger: The logger to emit the record on.
        message: The message.
        event_type: The kind of event.
        stacklevel: Extra frames to skip when locating the source.
    """
    logger.log(
        event_type.level,
        message,
        extra={"event_type": event_type},
        stacklevel=stacklevel + 1,
    )


class TraceFormatter(logging.Formatter):
    """Console formatter for API traffic traces.

    Records logged through ``log_event`` use their event type's marker;
    other records get the marker matching their level.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from apinet.utils.log import LogEventType, TraceFormatter, log_event
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(TraceFormatter())
        >>> logger = logging.getLogger("trace_example")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> log_event(logger, "hello", LogEventType.HOT)
        >>> "🔥 [" in stream.getvalue() and "-> hello" in stream.getvalue()
        True

        ```
    """

    default_time_format = "%Y-%m-%d %H:%M:%S"
    default_msec_format = "%s.%03d"

    def format(self, record: logging.LogRecord) -> str:
        event_type = getattr(record, "event_type", None)
        if not isinstance(event_type, LogEventType):
            event_type = LogEventType.from_level(record.levelno)
        line = (
            f"{self.formatTime(record, self.datefmt)} {event_type.marker} "
            f"[{record.filename}]:{record.lineno} {record.funcName} -> {record.getMessage()}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line
