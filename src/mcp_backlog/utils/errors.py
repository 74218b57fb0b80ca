"""Error classification for Backlog tools.

Every failure raised inside a tool is turned into a :class:`BacklogToolError`
carrying an MCP error code, a ``[tool_name]`` prefixed message and structured
data, so clients can tell bad input from auth problems and upstream outages.
"""

import logging
import re
from typing import Any, NoReturn

import requests
from fastmcp.exceptions import NotFoundError, ToolError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS
from pydantic import ValidationError

from mcp_backlog.exceptions import (
    BacklogError,
    BacklogInputError,
    BacklogRateLimitError,
    BacklogToolError,
)

logger = logging.getLogger("mcp-backlog.utils.errors")

# Implementation-defined server error codes (JSON-RPC -32000 to -32099)
UNAUTHENTICATED = -32002
PERMISSION_DENIED = -32003
UNAVAILABLE = -32004

DEFAULT_FALLBACK_MESSAGE = "Unknown Backlog client error."

_STATUS_PATTERN = re.compile(r"\b([1-5]\d{2})\b")

# Network failures mention ports and addresses, never an HTTP status.
_NETWORK_ERRORS = (requests.ConnectionError, requests.Timeout)


def _explicit_status(error: BaseException) -> int | None:
    status = getattr(error, "status", None)
    if isinstance(status, int) and not isinstance(status, bool):
        return status
    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def extract_status(error: BaseException) -> tuple[int | None, bool]:
    """Find the HTTP status behind an error.

    Returns:
        A ``(status, inferred)`` tuple. ``inferred`` is True when the status was
        recovered from the error message rather than an explicit attribute.
    """
    status = _explicit_status(error)
    if status is not None:
        return status, False
    if isinstance(error, _NETWORK_ERRORS):
        return None, False
    match = _STATUS_PATTERN.search(str(error))
    if match:
        return int(match.group(1)), True
    return None, False


def _validation_issues(error: BaseException) -> list[dict[str, Any]]:
    if isinstance(error, ValidationError):
        return error.errors(
            include_url=False, include_context=False, include_input=False
        )
    if isinstance(error, BacklogInputError):
        return list(error.issues)
    return []


def _status_data(
    error: BaseException, status: int | None, inferred: bool
) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if status is not None:
        data["status"] = status
        if inferred:
            data["status_inferred"] = True
    details = getattr(error, "details", None)
    if isinstance(error, BacklogError) and details is not None:
        data["details"] = details
    return data


def classify_error(
    error: BaseException,
    tool_name: str,
    fallback_message: str | None = None,
) -> BacklogToolError:
    """Map any exception raised by a tool onto an MCP error.

    Args:
        error: The exception raised while running the tool
        tool_name: Name of the tool, used to prefix the message
        fallback_message: Message used when nothing more specific is known

    Returns:
        A BacklogToolError ready to be raised to the MCP client
    """
    if isinstance(error, BacklogToolError):
        return error

    def build(code: int, category: str, message: str, data: dict[str, Any]):
        return BacklogToolError(
            code, f"[{tool_name}] {message}", data or None, category=category
        )

    if isinstance(error, BacklogRateLimitError):
        return build(
            UNAVAILABLE,
            "UNAVAILABLE",
            "Backlog API rate limit exceeded.",
            {"status": 429},
        )

    if isinstance(error, ValidationError | BacklogInputError):
        message = "Invalid parameters provided for Backlog tool."
        if isinstance(error, BacklogInputError):
            message = f"{message} {error}"
        return build(
            INVALID_PARAMS,
            "INVALID_ARGUMENT",
            message,
            {"issues": _validation_issues(error)},
        )

    status, inferred = extract_status(error)
    data = _status_data(error, status, inferred)

    if status == 401:
        return build(
            UNAUTHENTICATED, "UNAUTHENTICATED", "Backlog authentication failed.", data
        )
    if status == 403:
        return build(
            PERMISSION_DENIED, "PERMISSION_DENIED", "Backlog permission denied.", data
        )
    if status == 404:
        return build(
            INVALID_PARAMS, "INVALID_ARGUMENT", "Backlog resource was not found.", data
        )
    if status is not None and 400 <= status < 500:
        return build(INVALID_PARAMS, "INVALID_ARGUMENT", str(error), data)
    if status is not None and status >= 500:
        data["cause"] = str(error)
        return build(
            INTERNAL_ERROR,
            "INTERNAL",
            "Backlog service encountered an internal error.",
            data,
        )

    if str(error):
        data["cause"] = str(error)
    return build(
        INTERNAL_ERROR,
        "INTERNAL",
        fallback_message or DEFAULT_FALLBACK_MESSAGE,
        data,
    )


def handle_error(
    error: BaseException,
    tool_name: str,
    fallback_message: str | None = None,
) -> NoReturn:
    """Classify ``error`` and raise the resulting BacklogToolError."""
    tool_error = classify_error(error, tool_name, fallback_message)
    if tool_error is not error:
        logger.debug(
            f"Tool '{tool_name}' failed: {type(error).__name__}: {error}"
            f" -> {tool_error.category}"
        )
        raise tool_error from error
    raise tool_error


def classify_tool_failure(error: BaseException, tool_name: str) -> BacklogToolError:
    """Classify an exception raised by FastMCP while it ran a tool.

    FastMCP passes ToolError subclasses, BacklogToolError included, through
    unchanged. Anything else, including a rejected tool signature, arrives as a
    bare ToolError whose ``__cause__`` holds the original exception.

    Args:
        error: The exception raised by FastMCP
        tool_name: Tool name without the mount prefix

    Returns:
        The BacklogToolError to send to the MCP client
    """
    if isinstance(error, BacklogToolError):
        return error
    if isinstance(error, NotFoundError):
        return BacklogToolError(
            INVALID_PARAMS,
            f"[{tool_name}] Unknown tool.",
            category="INVALID_ARGUMENT",
        )
    if isinstance(error, ToolError) and error.__cause__ is not None:
        error = error.__cause__
    return classify_error(error, tool_name)
