"""Dependency provider for BacklogFetcher.

Provides get_backlog_fetcher and the backlog_fetcher context manager used by
tool functions.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import Context

from mcp_backlog.backlog import BacklogFetcher
from mcp_backlog.servers.context import MainAppContext

logger = logging.getLogger("mcp-backlog.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    """Return the MainAppContext stored by the main server lifespan, if any."""
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


async def get_backlog_fetcher(ctx: Context) -> BacklogFetcher:
    """Returns a BacklogFetcher built from the server-wide configuration.

    A fresh fetcher (and HTTP session) is created per tool invocation; the
    configuration itself is immutable and shared. Tools use backlog_fetcher,
    which also closes the session.

    Args:
        ctx: The FastMCP context.

    Returns:
        BacklogFetcher for the configured Backlog space.

    Raises:
        ValueError: If the Backlog configuration is not available.
    """
    app_lifespan_ctx = get_app_context(ctx)
    if app_lifespan_ctx is None or app_lifespan_ctx.full_backlog_config is None:
        logger.error("Backlog configuration could not be resolved from lifespan context.")
        raise ValueError("Backlog client is not configured or available.")
    logger.debug("get_backlog_fetcher: creating BacklogFetcher from global config.")
    return BacklogFetcher(config=app_lifespan_ctx.full_backlog_config)


@asynccontextmanager
async def backlog_fetcher(ctx: Context) -> AsyncIterator[BacklogFetcher]:
    """Yield a BacklogFetcher for one tool call and close its session afterwards."""
    fetcher = await get_backlog_fetcher(ctx)
    with fetcher:
        yield fetcher
