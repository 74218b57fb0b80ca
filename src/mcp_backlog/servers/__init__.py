"""Server implementations for MCP Backlog."""

from .backlog import backlog_mcp
from .main import main_mcp

__all__ = ["backlog_mcp", "main_mcp"]
