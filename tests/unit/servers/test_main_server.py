"""Tests for the main MCP server implementation."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from fastmcp import Client
from fastmcp.client import FastMCPTransport
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, TextContent

from mcp_backlog.backlog.config import BacklogConfig
from mcp_backlog.servers.context import MainAppContext
from mcp_backlog.servers.main import (
    filter_tools,
    health_check,
    main_lifespan,
    main_mcp,
    structured_content,
)
from mcp_backlog.utils.errors import PERMISSION_DENIED, UNAUTHENTICATED
from tests.fixtures.backlog_mocks import (
    MOCK_BACKLOG_COMMENTS,
    MOCK_BACKLOG_ISSUES,
    make_response,
)


def _tool(*tags):
    tool = MagicMock()
    tool.tags = set(tags)
    return tool


@pytest.fixture
def registered_tools():
    return {
        "backlog_ping": _tool("backlog", "read"),
        "backlog_list_issues": _tool("backlog", "read"),
        "backlog_create_issue": _tool("backlog", "write"),
    }


@pytest.fixture
def backlog_config():
    return BacklogConfig(
        url="https://example.backlog.com/api/v2", api_key="test-api-key"
    )


def test_filter_tools_keeps_everything_by_default(registered_tools, backlog_config):
    state = MainAppContext(full_backlog_config=backlog_config)

    names = [name for name, _ in filter_tools(registered_tools, state)]

    assert names == ["backlog_ping", "backlog_list_issues", "backlog_create_issue"]


def test_filter_tools_hides_write_tools_in_read_only_mode(
    registered_tools, backlog_config
):
    state = MainAppContext(full_backlog_config=backlog_config, read_only=True)

    names = [name for name, _ in filter_tools(registered_tools, state)]

    assert "backlog_create_issue" not in names
    assert "backlog_list_issues" in names


def test_filter_tools_applies_enabled_tools(registered_tools, backlog_config):
    state = MainAppContext(
        full_backlog_config=backlog_config, enabled_tools=["backlog_ping"]
    )

    names = [name for name, _ in filter_tools(registered_tools, state)]

    assert names == ["backlog_ping"]


def test_filter_tools_without_configuration(registered_tools):
    assert list(filter_tools(registered_tools, MainAppContext())) == []
    assert list(filter_tools(registered_tools, None)) == []


@pytest.mark.asyncio
async def test_health_check():
    response = await health_check(MagicMock())

    assert response.status_code == 200
    assert json.loads(response.body) == {"status": "ok"}


@pytest.mark.asyncio
async def test_main_lifespan_loads_configuration(backlog_env):
    with patch.dict(
        os.environ, {"READ_ONLY_MODE": "true", "ENABLED_TOOLS": "backlog_ping"}
    ):
        async with main_lifespan(main_mcp) as state:
            app_context = state["app_lifespan_context"]

    assert app_context.full_backlog_config.url == "https://example.backlog.com/api/v2/"
    assert app_context.full_backlog_config.api_key == "test-api-key"
    assert app_context.read_only is True
    assert app_context.enabled_tools == ["backlog_ping"]


@pytest.mark.asyncio
async def test_main_lifespan_fails_without_api_key():
    with patch.dict(
        os.environ, {"BACKLOG_BASE_URL": "https://example.backlog.com/api/v2"}, clear=True
    ):
        with pytest.raises(ValueError, match="BACKLOG_API_KEY"):
            async with main_lifespan(main_mcp):
                pass


@pytest.mark.asyncio
async def test_mounted_tools_are_prefixed():
    tools = await main_mcp.get_tools()

    expected = {
        "backlog_ping",
        "backlog_list_issues",
        "backlog_get_issue",
        "backlog_create_issue",
        "backlog_update_issue",
        "backlog_delete_issue",
        "backlog_transition_issue",
        "backlog_issues",
        "backlog_list_comments",
        "backlog_add_comment",
        "backlog_update_comment",
        "backlog_delete_comment",
        "backlog_comments",
        "backlog_attachments",
        "backlog_list_activities",
        "backlog_list_wiki_pages",
        "backlog_search_wiki_pages",
        "backlog_get_wiki_page",
        "backlog_create_wiki_page",
        "backlog_update_wiki_page",
        "backlog_delete_wiki_page",
    }
    assert expected <= set(tools)
    assert "write" in tools["backlog_create_issue"].tags
    assert "write" not in tools["backlog_get_issue"].tags


@pytest.mark.anyio
async def test_client_lists_and_calls_tools(backlog_env):
    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        tools = await client.list_tools()
        response = await client.call_tool("backlog_ping", {"message": "hi"})

    names = {tool.name for tool in tools}
    assert {"backlog_ping", "backlog_create_issue"} <= names
    assert response[0].type == "text"
    assert response[0].text == "pong:hi"


@pytest.mark.anyio
async def test_client_hides_write_tools_in_read_only_mode(backlog_env):
    with patch.dict(os.environ, {"READ_ONLY_MODE": "true"}):
        async with Client(transport=FastMCPTransport(main_mcp)) as client:
            tools = await client.list_tools()

    names = {tool.name for tool in tools}
    assert "backlog_list_comments" in names
    assert "backlog_create_issue" not in names
    assert "backlog_comments" not in names


@pytest.mark.asyncio
async def test_main_lifespan_warns_about_unknown_enabled_tools(backlog_env):
    with patch.dict(os.environ, {"ENABLED_TOOLS": "ping,list_isues"}):
        with patch("mcp_backlog.servers.main.logger") as mock_logger:
            async with main_lifespan(main_mcp) as state:
                enabled = state["app_lifespan_context"].enabled_tools

    assert enabled == ["backlog_ping", "backlog_list_isues"]
    mock_logger.warning.assert_called_once_with(
        "ENABLED_TOOLS lists unknown tools: backlog_list_isues"
    )


def test_structured_content():
    def text(value):
        return [TextContent(type="text", text=value)]

    assert structured_content(text('{"a": 1}')) == {"a": 1}
    assert structured_content(text("[1, 2]")) == {"result": [1, 2]}
    assert structured_content(text("pong:hi")) is None
    assert structured_content([]) is None


@pytest.fixture
def mock_session_cls():
    """Replace the HTTP session class used by BacklogClient."""
    with patch("mcp_backlog.backlog.client.Session") as session_cls:
        yield session_cls


@pytest.mark.anyio
async def test_client_receives_structured_content(backlog_env, mock_session_cls):
    mock_session_cls.return_value.request.return_value = make_response(
        json_data=MOCK_BACKLOG_COMMENTS
    )

    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        result = await client.call_tool_mcp("backlog_list_comments", {"issue_id": 42})

    assert result.isError is False
    assert result.structuredContent == json.loads(result.content[0].text)
    assert result.structuredContent["next_offset"] is None
    assert [c["id"] for c in result.structuredContent["comments"]] == [501, 502]
    mock_session_cls.return_value.close.assert_called_once()


@pytest.mark.anyio
async def test_client_receives_wrapped_list_result(backlog_env, mock_session_cls):
    mock_session_cls.return_value.request.return_value = make_response(
        json_data=MOCK_BACKLOG_ISSUES
    )

    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        result = await client.call_tool_mcp(
            "backlog_list_issues", {"project_key": "PROJ"}
        )

    issue_keys = [item["issue_key"] for item in result.structuredContent["result"]]
    assert issue_keys == ["PROJ-1", "PROJ-2"]


@pytest.mark.anyio
async def test_client_receives_classified_upstream_503(backlog_env, mock_session_cls):
    mock_session_cls.return_value.request.return_value = make_response(
        503, text="Service Unavailable"
    )

    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        with pytest.raises(McpError) as excinfo:
            await client.call_tool("backlog_list_comments", {"issue_id": 42})

    error = excinfo.value.error
    assert error.code == INTERNAL_ERROR
    assert error.message == (
        "[list_comments] Backlog service encountered an internal error."
    )
    assert error.data["category"] == "INTERNAL"
    assert error.data["status"] == 503
    assert error.data["details"] == "Service Unavailable"
    mock_session_cls.return_value.close.assert_called_once()


@pytest.mark.anyio
async def test_client_receives_unauthenticated_error(backlog_env, mock_session_cls):
    mock_session_cls.return_value.request.return_value = make_response(401)

    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        with pytest.raises(McpError) as excinfo:
            await client.call_tool("backlog_get_issue", {"issue_id_or_key": "PROJ-1"})

    error = excinfo.value.error
    assert error.code == UNAUTHENTICATED
    assert error.message == "[get_issue] Backlog authentication failed."
    assert error.data == {"category": "UNAUTHENTICATED", "status": 401}


@pytest.mark.anyio
@pytest.mark.parametrize(
    ("arguments", "issue_type"),
    [({}, "missing"), ({"issue_id": "abc"}, "int_parsing")],
)
async def test_client_receives_invalid_argument_for_bad_signature(
    backlog_env, mock_session_cls, arguments, issue_type
):
    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        with pytest.raises(McpError) as excinfo:
            await client.call_tool("backlog_list_comments", arguments)

    error = excinfo.value.error
    assert error.code == INVALID_PARAMS
    assert error.message == (
        "[list_comments] Invalid parameters provided for Backlog tool."
    )
    assert error.data["category"] == "INVALID_ARGUMENT"
    issues = error.data["issues"]
    assert [tuple(issue["loc"]) for issue in issues] == [("issue_id",)]
    assert issues[0]["type"] == issue_type
    mock_session_cls.return_value.request.assert_not_called()


@pytest.mark.anyio
async def test_client_receives_invalid_argument_from_input_model(
    backlog_env, mock_session_cls
):
    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        with pytest.raises(McpError) as excinfo:
            await client.call_tool("backlog_list_issues", {"project_key": ".."})

    assert excinfo.value.error.code == INVALID_PARAMS
    assert excinfo.value.error.message.startswith("[list_issues] ")
    mock_session_cls.return_value.request.assert_not_called()


@pytest.mark.anyio
async def test_client_receives_permission_denied_in_read_only_mode(
    backlog_env, mock_session_cls
):
    with patch.dict(os.environ, {"READ_ONLY_MODE": "true"}):
        async with Client(transport=FastMCPTransport(main_mcp)) as client:
            with pytest.raises(McpError) as excinfo:
                await client.call_tool(
                    "backlog_create_issue",
                    {"project_key": "PROJ", "issue": {"summary": "New"}},
                )

    error = excinfo.value.error
    assert error.code == PERMISSION_DENIED
    assert error.message == "[create_issue] Cannot create issue in read-only mode."
    assert error.data == {"category": "PERMISSION_DENIED"}
    mock_session_cls.return_value.request.assert_not_called()


@pytest.mark.anyio
async def test_client_receives_error_for_unknown_tool(backlog_env):
    async with Client(transport=FastMCPTransport(main_mcp)) as client:
        with pytest.raises(McpError) as excinfo:
            await client.call_tool("backlog_nope", {})

    assert excinfo.value.error.code == INVALID_PARAMS
    assert excinfo.value.error.message == "[nope] Unknown tool."
