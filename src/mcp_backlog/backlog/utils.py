"""Utility functions specific to Backlog operations."""

from typing import Any
from urllib.parse import quote

from mcp_backlog.exceptions import BacklogInputError, MCPBacklogAuthenticationError

API_KEY_REQUIRED_MESSAGE = "Backlog API key is required to authenticate requests."

DOT_SEGMENTS = frozenset({".", ".."})


def create_auth_headers(api_key: str | None) -> dict[str, str]:
    """Build the authentication header for a Backlog request.

    Raises:
        MCPBacklogAuthenticationError: If the API key is empty.
    """
    if not api_key or not api_key.strip():
        raise MCPBacklogAuthenticationError(API_KEY_REQUIRED_MESSAGE)
    return {"X-API-Key": api_key.strip()}


def encode_path_segment(value: str | int) -> str:
    """Percent-encode a single URL path segment, slashes included.

    Raises:
        BacklogInputError: If the value is "." or "..", which URL resolution
            would collapse into the parent path.
    """
    segment = str(value)
    if segment in DOT_SEGMENTS:
        message = f"'{segment}' is not a valid Backlog identifier."
        raise BacklogInputError(
            message, [{"loc": [], "msg": message, "type": "value_error"}]
        )
    return quote(segment, safe="")


def strip_none_values(payload: dict[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``payload`` without keys whose value is None."""
    if not payload:
        return {}
    return {key: value for key, value in payload.items() if value is not None}


def stringify_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
