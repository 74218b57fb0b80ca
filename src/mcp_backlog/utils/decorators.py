import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fastmcp import Context

from mcp_backlog.exceptions import BacklogToolError
from mcp_backlog.utils.errors import PERMISSION_DENIED, handle_error

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_tool_errors(func: F) -> F:
    """
    Decorator for FastMCP tools that routes every exception through the error classifier.
    The wrapped function's name is used as the tool name in error messages.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            handle_error(e, func.__name__)

    return wrapper  # type: ignore


def ensure_write_access(ctx: Context, tool_name: str, action: str | None = None) -> None:
    """Raise PERMISSION_DENIED when the server runs in read-only mode.

    Args:
        ctx: The FastMCP context of the current request.
        tool_name: Tool being invoked, used in the error message.
        action: Human readable action, defaults to the tool name with spaces.
    """
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    app_lifespan_ctx = (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )  # type: ignore

    if app_lifespan_ctx is not None and app_lifespan_ctx.read_only:
        action_description = action or tool_name.replace(
            "_", " "
        )  # e.g., "create_issue" -> "create issue"
        logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
        raise BacklogToolError(
            PERMISSION_DENIED,
            f"[{tool_name}] Cannot {action_description} in read-only mode.",
            category="PERMISSION_DENIED",
        )


def check_write_access(func: F) -> F:
    """
    Decorator for FastMCP tools to check if the application is in read-only mode.
    Assumes the decorated function is async and has `ctx: Context` as its first argument.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        ensure_write_access(ctx, func.__name__)
        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore
