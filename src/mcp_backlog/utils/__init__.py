"""
Utility functions for the MCP Backlog integration.
"""

from .errors import classify_error, handle_error
from .io import is_read_only_mode
from .logging import log_config_param, mask_sensitive, setup_logging
from .pagination import (
    PaginationOptions,
    build_pagination_params,
    compute_next_offset,
    normalize_pagination,
)
from .ssl import UnverifiedTLSAdapter, configure_ssl_verification
from .tools import get_enabled_tools, should_include_tool

__all__ = [
    "PaginationOptions",
    "UnverifiedTLSAdapter",
    "build_pagination_params",
    "classify_error",
    "compute_next_offset",
    "configure_ssl_verification",
    "get_enabled_tools",
    "handle_error",
    "is_read_only_mode",
    "log_config_param",
    "mask_sensitive",
    "normalize_pagination",
    "setup_logging",
    "should_include_tool",
]
