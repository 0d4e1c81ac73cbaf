from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from apinet.alerts import AlertNotifier, format_alert_title
from apinet.exceptions import DecodeError, HttpStatusError, TransportError

TEST_URL = "https://api.example.com/users"

########################################
#     Tests for format_alert_title     #
########################################


def test_format_alert_title_with_status() -> None:
    assert format_alert_title("Network error", 503) == "Network error (503)"


def test_format_alert_title_without_status() -> None:
    assert format_alert_title("Network error", None) == "Network error"


###################################
#     Tests for AlertNotifier     #
###################################


def test_alert_notifier_transport_error(mock_alerts: Mock) -> None:
    notifier = AlertNotifier(mock_alerts)
    notifier.notify(TransportError("timed out", method="GET", url=TEST_URL))
    mock_alerts.show_failure.assert_called_once_with("Network error", "timed out")


def test_alert_notifier_http_status_error(mock_alerts: Mock) -> None:
    notifier = AlertNotifier(mock_alerts, title="Oops")
    notifier.notify(HttpStatusError("not found", method="GET", url=TEST_URL, status_code=404))
    mock_alerts.show_failure.assert_called_once_with("Oops (404)", "not found")


def test_alert_notifier_ignores_decode_error(mock_alerts: Mock) -> None:
    notifier = AlertNotifier(mock_alerts)
    notifier.notify(DecodeError("bad body", method="GET", url=TEST_URL, status_code=200))
    mock_alerts.show_failure.assert_not_called()


def test_alert_notifier_without_surface() -> None:
    AlertNotifier().notify(TransportError("timed out", method="GET", url=TEST_URL))


def test_alert_notifier_uses_dispatcher(mock_alerts: Mock) -> None:
    dispatcher = Mock()
    notifier = AlertNotifier(mock_alerts, dispatcher=dispatcher)
    notifier.notify(TransportError("timed out", method="GET", url=TEST_URL))
    dispatcher.dispatch.assert_called_once()
    mock_alerts.show_failure.assert_not_called()


def test_alert_notifier_delivery_failure_is_logged(
    mock_alerts: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    mock_alerts.show_failure.side_effect = RuntimeError("no window")
    notifier = AlertNotifier(mock_alerts)
    with caplog.at_level(logging.ERROR, logger="apinet.alerts"):
        notifier.notify(TransportError("timed out", method="GET", url=TEST_URL))
    assert "Failed to show failure alert" in caplog.text
