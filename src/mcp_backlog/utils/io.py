"""Environment flag helpers for MCP Backlog."""

import os

TRUTHY_VALUES = ("true", "1", "yes", "y", "on")


def is_env_truthy(name: str, default: str = "false") -> bool:
    """Check whether an environment variable holds a truthy value."""
    return os.getenv(name, default).lower() in TRUTHY_VALUES


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode hides and refuses every tool that creates, updates or
    deletes Backlog data, while list and get tools keep working.

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    return is_env_truthy("READ_ONLY_MODE")
