"""Base client module for Backlog API interactions."""

import logging
from typing import Any, Literal
from urllib.parse import urljoin

from requests import PreparedRequest, Response, Session

from mcp_backlog.exceptions import (
    BacklogRateLimitError,
    BacklogRequestError,
    MCPBacklogAuthenticationError,
)
from mcp_backlog.utils.ssl import configure_ssl_verification

from .config import BacklogConfig
from .utils import API_KEY_REQUIRED_MESSAGE, create_auth_headers, stringify_query_value

logger = logging.getLogger("mcp-backlog")

HttpMethod = Literal["GET", "POST", "PATCH", "DELETE"]

NO_CONTENT_STATUSES = (204, 205)


class BacklogClient:
    """Base client for Backlog API interactions.

    Performs exactly one HTTP exchange per call. Path segments must already be
    percent-encoded by the caller; the client only joins them to the base URL.
    """

    config: BacklogConfig
    session: Session

    def __init__(self, config: BacklogConfig | None = None) -> None:
        """Initialize the Backlog client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            ValueError: If the base URL is empty
            MCPBacklogAuthenticationError: If the API key is empty
        """
        self.config = config or BacklogConfig.from_env()

        if not self.config.url:
            raise ValueError("Backlog base URL is required.")
        if not self.config.api_key:
            raise MCPBacklogAuthenticationError(API_KEY_REQUIRED_MESSAGE)

        self.session = Session()

        configure_ssl_verification(
            self.session, self.config.url, self.config.ssl_verify
        )

        proxies = {}
        if self.config.http_proxy:
            proxies["http"] = self.config.http_proxy
        if self.config.https_proxy:
            proxies["https"] = self.config.https_proxy
        if self.config.no_proxy:
            proxies["no_proxy"] = self.config.no_proxy
        if proxies:
            self.session.proxies.update(proxies)
            logger.debug(f"Backlog client using proxies: {sorted(proxies)}")

    def build_url(self, path: str, query: dict[str, Any] | None = None) -> str:
        """Resolve ``path`` against the base URL and append the query string.

        ``None`` query values are dropped and ``apiKey`` is always set last.
        """
        prepared = PreparedRequest()
        prepared.prepare_url(
            urljoin(self.config.url, path.lstrip("/")), self._build_query(query)
        )
        return prepared.url

    def _build_query(self, query: dict[str, Any] | None) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        for key, value in (query or {}).items():
            if value is None or key == "apiKey":
                continue
            if isinstance(value, list | tuple):
                params.extend(
                    (key, stringify_query_value(item))
                    for item in value
                    if item is not None
                )
            else:
                params.append((key, stringify_query_value(value)))
        params.append(("apiKey", self.config.api_key))
        return params

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            **create_auth_headers(self.config.api_key),
        }

    def request(
        self,
        method: HttpMethod,
        path: str,
        *,
        query: dict[str, Any] | None = None,
        payload: Any = None,
    ) -> Any:
        """Send one request to Backlog and decode the JSON answer.

        Args:
            method: HTTP method
            path: Resource path relative to the base URL
            query: Optional query parameters
            payload: Optional JSON body

        Returns:
            The decoded JSON body, or None for 204/205 responses

        Raises:
            BacklogRateLimitError: If Backlog answers with 429
            BacklogRequestError: For any other non-2xx status
            requests.RequestException: On transport failures
            ValueError: If a 2xx body is not valid JSON
        """
        headers = self._headers()
        url = self.build_url(path, query)
        # url carries the API key; log the path only
        logger.debug(f"Backlog request: {method} {path}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=payload,
            )
        except Exception as e:
            logger.error(f"Backlog request {method} {path} failed: {e}")
            raise

        return self._handle_response(method, path, response)

    def _handle_response(self, method: str, path: str, response: Response) -> Any:
        if response.status_code == 429:
            logger.warning(f"Backlog rate limit hit on {method} {path}")
            raise BacklogRateLimitError()

        if not response.ok:
            details = _read_error_body(response)
            logger.error(
                f"Backlog request {method} {path} failed with status "
                f"{response.status_code}: {details or 'no response body'}"
            )
            raise BacklogRequestError(response.status_code, details)

        if response.status_code in NO_CONTENT_STATUSES:
            return None

        return response.json()

    def get(self, path: str, query: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, query=query)

    def post(
        self, path: str, payload: Any = None, query: dict[str, Any] | None = None
    ) -> Any:
        return self.request("POST", path, query=query, payload=payload)

    def patch(
        self, path: str, payload: Any = None, query: dict[str, Any] | None = None
    ) -> Any:
        return self.request("PATCH", path, query=query, payload=payload)

    def delete(self, path: str, query: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, query=query)

    def close(self) -> None:
        """Close the underlying HTTP session and its pooled connections."""
        self.session.close()

    def __enter__(self) -> "BacklogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _read_error_body(response: Response) -> str | None:
    text = (response.text or "").strip()
    return text or None
