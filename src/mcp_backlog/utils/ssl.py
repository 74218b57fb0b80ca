"""TLS verification settings for the Backlog HTTP session."""

import logging
from typing import Any
from urllib.parse import urlsplit

from requests import PreparedRequest, Response
from requests.adapters import HTTPAdapter
from requests.sessions import Session

logger = logging.getLogger("mcp-backlog")


class UnverifiedTLSAdapter(HTTPAdapter):
    """Transport adapter that sends every request with certificate checks off.

    Used for self-hosted Backlog behind a private CA when BACKLOG_SSL_VERIFY is
    false. Overriding ``verify`` at send time also covers proxied requests.
    """

    def send(self, request: PreparedRequest, **kwargs: Any) -> Response:
        kwargs["verify"] = False
        return super().send(request, **kwargs)


def backlog_origin(base_url: str) -> str:
    """Return ``scheme://host[:port]/`` for a Backlog base URL."""
    parts = urlsplit(base_url)
    return f"{parts.scheme}://{parts.netloc}/"


def configure_ssl_verification(
    session: Session, base_url: str, ssl_verify: bool
) -> str | None:
    """Disable certificate checks for the Backlog host when ``ssl_verify`` is false.

    The adapter is mounted on the origin including its trailing slash, so a host
    that merely starts with the Backlog hostname is still verified.

    Args:
        session: The requests session used for Backlog calls
        base_url: The configured Backlog API base URL
        ssl_verify: Value of BACKLOG_SSL_VERIFY

    Returns:
        The origin the adapter was mounted on, or None when verification stays on.
    """
    if ssl_verify:
        return None

    origin = backlog_origin(base_url)
    logger.warning(
        f"Backlog SSL verification disabled for {origin}. "
        "Only use this with a trusted self-hosted instance."
    )
    session.mount(origin, UnverifiedTLSAdapter())
    return origin
