"""Main FastMCP server setup for Backlog integration."""

import json
import logging
from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool as FastMCPTool
from mcp.shared.exceptions import McpError
from mcp.types import (
    CallToolRequest,
    CallToolResult,
    EmbeddedResource,
    ImageContent,
    ServerResult,
    TextContent,
)
from mcp.types import Tool as MCPTool
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_backlog.backlog.config import BacklogConfig
from mcp_backlog.utils.errors import classify_tool_failure
from mcp_backlog.utils.io import is_read_only_mode
from mcp_backlog.utils.logging import log_config_param
from mcp_backlog.utils.tools import (
    get_enabled_tools,
    should_include_tool,
    unknown_tool_names,
)

from .backlog import backlog_mcp
from .context import MainAppContext

logger = logging.getLogger("mcp-backlog.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    """Load the Backlog configuration once for the lifetime of the server.

    A missing base URL or API key is fatal: the ValueError from
    BacklogConfig.from_env propagates and the server does not start.
    """
    logger.info("Main Backlog MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()
    unknown = unknown_tool_names(enabled_tools, await app.get_tools())
    if unknown:
        logger.warning(f"ENABLED_TOOLS lists unknown tools: {', '.join(unknown)}")

    try:
        backlog_config = BacklogConfig.from_env()
    except ValueError as e:
        logger.error(f"Failed to load Backlog configuration: {e}")
        raise

    log_config_param(logger, "Backlog", "URL", backlog_config.url)
    log_config_param(logger, "Backlog", "API key", backlog_config.api_key, sensitive=True)

    app_context = MainAppContext(
        full_backlog_config=backlog_config,
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")
    yield {"app_lifespan_context": app_context}
    logger.info("Main Backlog MCP server lifespan shutting down.")


def filter_tools(
    tools: dict[str, FastMCPTool],
    app_lifespan_state: MainAppContext | None,
) -> Iterable[tuple[str, FastMCPTool]]:
    """Yield the tools visible under the current read-only and enabled-tools settings."""
    read_only = app_lifespan_state.read_only if app_lifespan_state else False
    enabled_tools_filter = (
        app_lifespan_state.enabled_tools if app_lifespan_state else None
    )

    for registered_name, tool_obj in tools.items():
        if not should_include_tool(registered_name, enabled_tools_filter):
            logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
            continue

        if read_only and "write" in tool_obj.tags:
            logger.debug(
                f"Excluding tool '{registered_name}' due to read-only mode and 'write' tag"
            )
            continue

        if "backlog" in tool_obj.tags and (
            app_lifespan_state is None or app_lifespan_state.full_backlog_config is None
        ):
            logger.debug(
                f"Excluding Backlog tool '{registered_name}' as Backlog configuration is unavailable."
            )
            continue

        yield registered_name, tool_obj


def structured_content(
    content: Sequence[TextContent | ImageContent | EmbeddedResource],
) -> dict[str, Any] | None:
    """Decode a tool's JSON text result into its structured form.

    JSON values that are not objects are wrapped as ``{"result": value}``.
    Plain text results (e.g. ``ping``) have no structured form.
    """
    if len(content) != 1 or not isinstance(content[0], TextContent):
        return None
    try:
        value = json.loads(content[0].text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else {"result": value}


class BacklogMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class for Backlog integration with tool filtering."""

    def _setup_handlers(self) -> None:
        super()._setup_handlers()
        self._mcp_server.request_handlers[CallToolRequest] = self._handle_call_tool

    def _local_tool_name(self, key: str) -> str:
        for server in self._mounted_servers.values():
            if server.match_tool(key):
                return server.strip_tool_prefix(key)
        return key

    async def _handle_call_tool(self, req: CallToolRequest) -> ServerResult:
        """Run a tool and answer with its text and structured result.

        Failures are classified and raised as McpError, so the client receives
        the code, the ``[tool]`` message and the data (category, status,
        details) as a JSON-RPC error.
        """
        key = req.params.name
        try:
            content = await self._mcp_call_tool(key, req.params.arguments or {})
        except Exception as e:
            tool_error = classify_tool_failure(e, self._local_tool_name(key))
            logger.debug(f"Tool '{key}' failed with {tool_error.category}")
            raise McpError(tool_error.to_error_data()) from e

        result: dict[str, Any] = {"content": list(content), "isError": False}
        structured = structured_content(content)
        if structured is not None:
            result["structuredContent"] = structured
        return ServerResult(CallToolResult(**result))

    async def _mcp_list_tools(self) -> list[MCPTool]:
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            logger.warning("Lifespan context not available during _mcp_list_tools call.")
            return []

        lifespan_ctx_dict = req_context.lifespan_context
        app_lifespan_state: MainAppContext | None = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        logger.debug(
            f"Aggregated {len(all_tools)} tools before filtering: {list(all_tools.keys())}"
        )

        filtered_tools = [
            tool_obj.to_mcp_tool(name=registered_name)
            for registered_name, tool_obj in filter_tools(all_tools, app_lifespan_state)
        ]
        logger.debug(f"_mcp_list_tools: Total tools after filtering: {len(filtered_tools)}")
        return filtered_tools


main_mcp = BacklogMCP(name="Backlog MCP", lifespan=main_lifespan)
main_mcp.mount("backlog", backlog_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
