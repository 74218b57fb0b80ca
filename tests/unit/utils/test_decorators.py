from unittest.mock import MagicMock

import pytest

from mcp_backlog.exceptions import BacklogRequestError, BacklogToolError
from mcp_backlog.utils.decorators import (
    check_write_access,
    ensure_write_access,
    handle_tool_errors,
)
from mcp_backlog.utils.errors import PERMISSION_DENIED


class DummyContext:
    def __init__(self, read_only):
        self.request_context = MagicMock()
        self.request_context.lifespan_context = {
            "app_lifespan_context": MagicMock(read_only=read_only)
        }


@pytest.mark.asyncio
async def test_check_write_access_blocks_in_read_only():
    @check_write_access
    async def dummy_tool(ctx, x):
        return x * 2

    ctx = DummyContext(read_only=True)
    with pytest.raises(BacklogToolError) as exc:
        await dummy_tool(ctx, 3)
    assert exc.value.code == PERMISSION_DENIED
    assert exc.value.category == "PERMISSION_DENIED"
    assert str(exc.value) == "[dummy_tool] Cannot dummy tool in read-only mode."


@pytest.mark.asyncio
async def test_check_write_access_allows_in_writable():
    @check_write_access
    async def dummy_tool(ctx, x):
        return x * 2

    ctx = DummyContext(read_only=False)
    result = await dummy_tool(ctx, 4)
    assert result == 8


def test_ensure_write_access_custom_action():
    with pytest.raises(BacklogToolError) as exc:
        ensure_write_access(DummyContext(read_only=True), "comments", "create comment")
    assert str(exc.value) == "[comments] Cannot create comment in read-only mode."


def test_ensure_write_access_without_lifespan_state():
    ctx = MagicMock()
    ctx.request_context.lifespan_context = None
    ensure_write_access(ctx, "create_issue")


@pytest.mark.asyncio
async def test_handle_tool_errors_classifies_with_function_name():
    @handle_tool_errors
    async def get_issue():
        raise BacklogRequestError(403)

    with pytest.raises(BacklogToolError) as exc:
        await get_issue()
    assert str(exc.value) == "[get_issue] Backlog permission denied."


@pytest.mark.asyncio
async def test_handle_tool_errors_keeps_result_and_name():
    @handle_tool_errors
    async def list_issues(value):
        return value

    assert await list_issues("ok") == "ok"
    assert list_issues.__name__ == "list_issues"
