"""ENABLED_TOOLS allow-list handling for MCP Backlog."""

import logging
import os
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Mount prefix of the Backlog tools on the main server
TOOL_PREFIX = "backlog_"


def qualify_tool_name(name: str) -> str:
    """Return the name a tool is exposed under, e.g. ``list_issues`` -> ``backlog_list_issues``."""
    return name if name.startswith(TOOL_PREFIX) else f"{TOOL_PREFIX}{name}"


def get_enabled_tools() -> list[str] | None:
    """Read the tool allow-list from the ENABLED_TOOLS environment variable.

    Entries are comma separated and may omit the ``backlog_`` prefix. Blank
    entries and duplicates are dropped; order is kept.

    Returns:
        Exposed tool names, or None when the variable is unset or names nothing.

    Examples:
        ENABLED_TOOLS="ping, backlog_get_issue,ping" -> ["backlog_ping", "backlog_get_issue"]
        ENABLED_TOOLS=" , " -> None
    """
    raw = os.getenv("ENABLED_TOOLS")
    if not raw:
        logger.debug("ENABLED_TOOLS environment variable not set or empty.")
        return None

    names: list[str] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if entry and qualify_tool_name(entry) not in names:
            names.append(qualify_tool_name(entry))

    logger.debug(f"Parsed enabled tools from environment: {names}")
    return names or None


def unknown_tool_names(
    enabled_tools: list[str] | None, available: Iterable[str]
) -> list[str]:
    """List allow-list entries that match no registered tool."""
    if not enabled_tools:
        return []
    known = set(available)
    return [name for name in enabled_tools if name not in known]


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check a registered tool name against the allow-list.

    Args:
        tool_name: Name the tool is registered under on the main server.
        enabled_tools: Allow-list from get_enabled_tools, or None for all tools.
    """
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
