"""Configuration module for Backlog API interactions."""

import os
from dataclasses import dataclass

from ..utils.io import is_env_truthy

REQUIRED_ENV_MESSAGE = (
    "Missing required environment variable {name} for Backlog MCP server."
)


@dataclass
class BacklogConfig:
    """Backlog API configuration.

    The base URL points at the REST root of a space, for example
    ``https://example.backlog.com/api/v2``. It is normalized to carry exactly
    one trailing slash so relative resource paths resolve beneath it.
    """

    url: str  # Base URL for the Backlog REST API
    api_key: str  # Backlog API key
    ssl_verify: bool = True  # Whether to verify SSL certificates
    http_proxy: str | None = None  # HTTP proxy URL
    https_proxy: str | None = None  # HTTPS proxy URL
    no_proxy: str | None = None  # Comma-separated list of hosts to bypass proxy

    def __post_init__(self) -> None:
        self.url = normalize_base_url(self.url)
        self.api_key = (self.api_key or "").strip()

    @classmethod
    def from_env(cls) -> "BacklogConfig":
        """Create configuration from environment variables.

        Returns:
            BacklogConfig with values from environment variables

        Raises:
            ValueError: If BACKLOG_BASE_URL or BACKLOG_API_KEY is missing
        """
        url = os.getenv("BACKLOG_BASE_URL", "").strip()
        if not url:
            raise ValueError(REQUIRED_ENV_MESSAGE.format(name="BACKLOG_BASE_URL"))

        api_key = os.getenv("BACKLOG_API_KEY", "").strip()
        if not api_key:
            raise ValueError(REQUIRED_ENV_MESSAGE.format(name="BACKLOG_API_KEY"))

        ssl_verify = is_env_truthy("BACKLOG_SSL_VERIFY", "true")

        http_proxy = os.getenv("BACKLOG_HTTP_PROXY", os.getenv("HTTP_PROXY"))
        https_proxy = os.getenv("BACKLOG_HTTPS_PROXY", os.getenv("HTTPS_PROXY"))
        no_proxy = os.getenv("BACKLOG_NO_PROXY", os.getenv("NO_PROXY"))

        return cls(
            url=url,
            api_key=api_key,
            ssl_verify=ssl_verify,
            http_proxy=http_proxy,
            https_proxy=https_proxy,
            no_proxy=no_proxy,
        )


def normalize_base_url(url: str | None) -> str:
    """Trim the base URL and make sure it ends with exactly one slash."""
    trimmed = (url or "").strip()
    if not trimmed:
        return ""
    return trimmed.rstrip("/") + "/"
