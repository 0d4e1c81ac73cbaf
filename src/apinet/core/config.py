r"""Session configuration dataclass and defaults for ApiClient.

This module provides the configuration constants and the immutable
configuration object an ApiClient is built from.
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "DEFAULT_HEADERS",
    "DEFAULT_MAX_CONNECTIONS_PER_HOST",
    "DEFAULT_TIMEOUT",
]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from apinet.core.validation import (
    validate_base_url,
    validate_max_connections,
    validate_timeout,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from apinet.core.settings import ServerSettings


# Request timeout in seconds, enforced by the transport
DEFAULT_TIMEOUT = 20.0

# Maximum number of concurrent connections to the API host
DEFAULT_MAX_CONNECTIONS_PER_HOST = 3

# Headers added to every request unless the caller supplies the same key
DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
)


@dataclass(frozen=True)
class ClientConfig:
    """Configuration of the transport session used by an ApiClient.

    The configuration is created once and never mutated; ApiClient owns
    the transport session built from it.

    Args:
        base_url: The URL every request path is resolved against.
        timeout: Maximum seconds to wait for a request. Must be > 0.
        max_connections_per_host: Maximum number of concurrent connections
            to the API host. Must be >= 1.
        default_headers: Headers added to requests that do not already
            carry the same key.
        alert_title: Title prefix used for failure alerts.

    Example:
        ```pycon
        >>> from apinet.core.config import ClientConfig
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config.timeout
        20.0
        >>> config.max_connections_per_host
        3

        ```
    """

    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    max_connections_per_host: int = DEFAULT_MAX_CONNECTIONS_PER_HOST
    default_headers: Mapping[str, str] = field(default_factory=lambda: DEFAULT_HEADERS)
    alert_title: str = "Network error"

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_base_url(self.base_url)
        validate_timeout(self.timeout)
        validate_max_connections(self.max_connections_per_host)
        # Freeze a private copy so later edits to the caller's dict are not seen
        object.__setattr__(
            self, "default_headers", MappingProxyType(dict(self.default_headers))
        )

    @classmethod
    def from_settings(cls, settings: ServerSettings | None = None) -> ClientConfig:
        """Create a config for the server selected in the environment.

        Args:
            settings: The server settings to use. If ``None``, they are
                loaded from ``APINET_*`` environment variables.

        Returns:
            A ClientConfig pointing at the selected server.

        Raises:
            ValueError: If the selected server has no URL configured.
        """
        if settings is None:
            from apinet.core.settings import ServerSettings

            settings = ServerSettings()
        return cls(base_url=settings.api_url)
