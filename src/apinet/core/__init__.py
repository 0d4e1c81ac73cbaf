r"""Core configuration and validation shared by the API client.

This package contains the session configuration dataclass, the
environment-selected server settings, and the validation helpers used
when building both.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_HEADERS",
    "DEFAULT_MAX_CONNECTIONS_PER_HOST",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "ServerDirection",
    "ServerSettings",
    "validate_base_url",
    "validate_max_connections",
    "validate_path",
    "validate_timeout",
]

from apinet.core.config import (
    DEFAULT_HEADERS,
    DEFAULT_MAX_CONNECTIONS_PER_HOST,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from apinet.core.settings import ServerDirection, ServerSettings
from apinet.core.validation import (
    validate_base_url,
    validate_max_connections,
    validate_path,
    validate_timeout,
)
