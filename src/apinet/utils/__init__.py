r"""Utility helpers for the API client."""

from __future__ import annotations

__all__ = ["LogEventType", "TraceFormatter", "log_event"]

from apinet.utils.log import LogEventType, TraceFormatter, log_event
