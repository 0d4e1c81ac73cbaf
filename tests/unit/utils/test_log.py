from __future__ import annotations

import logging
from io import StringIO

import pytest

from apinet.utils.log import LogEventType, TraceFormatter, log_event


@pytest.fixture
def stream_logger() -> tuple[logging.Logger, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(TraceFormatter())
    logger = logging.getLogger("apinet.tests.trace")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, stream


##################################
#     Tests for LogEventType     #
##################################


@pytest.mark.parametrize(
    ("event_type", "level"),
    [
        (LogEventType.ERROR, logging.ERROR),
        (LogEventType.INFO, logging.INFO),
        (LogEventType.TRACE, logging.DEBUG),
        (LogEventType.HOT, logging.WARNING),
    ],
)
def test_log_event_type_level(event_type: LogEventType, level: int) -> None:
    assert event_type.level == level


@pytest.mark.parametrize(
    ("level", "event_type"),
    [
        (logging.CRITICAL, LogEventType.ERROR),
        (logging.ERROR, LogEventType.ERROR),
        (logging.WARNING, LogEventType.HOT),
        (logging.INFO, LogEventType.INFO),
        (logging.DEBUG, LogEventType.TRACE),
    ],
)
def test_log_event_type_from_level(level: int, event_type: LogEventType) -> None:
    assert LogEventType.from_level(level) is event_type


###############################
#     Tests for log_event     #
###############################


def test_log_event_records_caller_location(stream_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = stream_logger
    log_event(logger, "hello", LogEventType.INFO)
    output = stream.getvalue()
    assert "ℹ️ [test_log.py]:" in output
    assert "test_log_event_records_caller_location -> hello" in output


def test_log_event_default_is_trace(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("apinet.tests.default")
    with caplog.at_level(logging.DEBUG, logger="apinet.tests.default"):
        log_event(logger, "trace me")
    assert caplog.records[0].levelno == logging.DEBUG
    assert caplog.records[0].event_type is LogEventType.TRACE


####################################
#     Tests for TraceFormatter     #
####################################


def test_trace_formatter_plain_record_uses_level_marker(
    stream_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = stream_logger
    logger.warning("careful")
    assert "🔥 [test_log.py]:" in stream.getvalue()


def test_trace_formatter_includes_exception(
    stream_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = stream_logger
    try:
        msg = "boom"
        raise ValueError(msg)
    except ValueError:
        logger.exception("failed")
    output = stream.getvalue()
    assert "‼️ [test_log.py]:" in output
    assert "ValueError: boom" in output
