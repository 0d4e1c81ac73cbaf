r"""Environment-selected server settings.

The base URL of the API is not hard-coded in the client: it is picked
from the environment according to the server direction (development or
production). Settings are read from ``APINET_*`` environment variables.

Example:
    ```pycon
    >>> from apinet.core.settings import ServerDirection, ServerSettings
    >>> settings = ServerSettings(
    ...     server=ServerDirection.PRODUCTION,
    ...     production_url="https://api.example.com",
    ... )
    >>> settings.api_url
    'https://api.example.com'

    ```
"""

from __future__ import annotations

__all__ = ["ServerDirection", "ServerSettings"]

import logging
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger: logging.Logger = logging.getLogger(__name__)


class ServerDirection(str, Enum):
    """The backend deployment the client talks to.

    Attributes:
        DEVELOPMENT: The development server.
        PRODUCTION: The production server.
    """

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class ServerSettings(BaseSettings):
    """Server selection loaded from the environment.

    Environment variables:
        APINET_SERVER: ``development`` (default) or ``production``.
        APINET_DEVELOPMENT_URL: Base URL of the development server.
        APINET_PRODUCTION_URL: Base URL of the production server.
    """

    model_config = SettingsConfigDict(
        env_prefix="APINET_",
        extra="ignore",
    )

    server: ServerDirection = ServerDirection.DEVELOPMENT
    development_url: str | None = Field(
        default=None, description="Base URL used when server is 'development'."
    )
    production_url: str | None = Field(
        default=None, description="Base URL used when server is 'production'."
    )

    @property
    def api_url(self) -> str:
        """The base URL of the selected server.

        Raises:
            ValueError: If no URL is configured for the selected server.
        """
        url = (
            self.production_url
            if self.server is ServerDirection.PRODUCTION
            else self.development_url
        )
        if not url:
            msg = (
                f"no base URL configured for the {self.server.value} server; "
                f"set APINET_{self.server.value.upper()}_URL"
            )
            raise ValueError(msg)
        logger.debug(f"Selected {self.server.value} server at {url}")
        return url
