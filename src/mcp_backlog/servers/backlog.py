"""Backlog FastMCP server instance and tool definitions."""

import asyncio
import json
import logging
from typing import Annotated, Any, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_backlog.models.backlog.inputs import (
    AddCommentInput,
    AttachmentsInput,
    CommentRefInput,
    CommentsInput,
    CreateIssueInput,
    IssueRefInput,
    IssuesInput,
    ListActivitiesInput,
    ListCommentsInput,
    ListIssuesInput,
    ListWikiPagesInput,
    SearchWikiPagesInput,
    TransitionIssueInput,
    UpdateCommentInput,
    UpdateIssueInput,
    UpdateWikiPageInput,
    WikiCreatePayload,
    WikiRefInput,
)
from mcp_backlog.servers.dependencies import backlog_fetcher
from mcp_backlog.utils.decorators import (
    check_write_access,
    ensure_write_access,
    handle_tool_errors,
)
from mcp_backlog.utils.pagination import compute_next_offset

logger = logging.getLogger(__name__)

backlog_mcp = FastMCP(
    name="Backlog MCP Service",
    instructions="Provides tools for interacting with Backlog issues, comments, attachments, wikis and activities.",
)

OffsetArg = Annotated[
    float | None,
    Field(
        description="Number of items to skip. Fractions are floored and negatives treated as 0.",
        default=None,
    ),
]
LimitArg = Annotated[
    float | None,
    Field(
        description="Maximum number of items to return. Fractions are floored; values below 1 become 1.",
        default=None,
    ),
]


def _dumps(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


@backlog_mcp.tool(tags={"backlog", "read"})
async def ping(
    message: Annotated[str, Field(description="Text echoed back by the server")],
) -> str:
    """Check that the Backlog MCP server is reachable.

    Args:
        message: Text to echo.

    Returns:
        The string "pong:" followed by the message.
    """
    return f"pong:{message}"


# Issues


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def list_issues(
    ctx: Context,
    project_key: Annotated[
        str, Field(description="Backlog project key (e.g., 'PROJ')")
    ],
    keyword: Annotated[
        str | None,
        Field(description="Optional keyword to filter issues by", default=None),
    ] = None,
    count: Annotated[
        int | None,
        Field(description="Maximum number of issues to return", default=None),
    ] = None,
) -> str:
    """List issues of a Backlog project.

    Args:
        ctx: The FastMCP context.
        project_key: Backlog project key.
        keyword: Optional keyword filter; blank keywords are ignored.
        count: Maximum number of issues.

    Returns:
        JSON array of issues with id, issue_key, summary, status, assignee and updated.
    """
    params = ListIssuesInput(project_key=project_key, keyword=keyword, count=count)
    async with backlog_fetcher(ctx) as backlog:
        issues = await asyncio.to_thread(
            backlog.list_issues,
            params.project_key,
            keyword=params.keyword,
            count=params.count,
        )
    return _dumps([issue.to_list_item_dict() for issue in issues])


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def get_issue(
    ctx: Context,
    issue_id_or_key: Annotated[
        str, Field(description="Issue key (e.g., 'PROJ-123') or numeric issue id")
    ],
) -> str:
    """Get details of a single Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id_or_key: Issue key or id.

    Returns:
        JSON object with id, issue_key, summary, description, status and assignee.
    """
    params = IssueRefInput(issue_id_or_key=issue_id_or_key)
    async with backlog_fetcher(ctx) as backlog:
        issue = await asyncio.to_thread(backlog.get_issue, params.issue_id_or_key)
    return _dumps(issue.to_simplified_dict())


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def create_issue(
    ctx: Context,
    project_key: Annotated[
        str, Field(description="Backlog project key (e.g., 'PROJ')")
    ],
    issue: Annotated[
        dict[str, Any],
        Field(
            description=(
                "Issue fields. 'summary' is required; 'description' is optional. "
                "Any other Backlog field (e.g. 'issueTypeId', 'priorityId', 'assigneeId') "
                "is forwarded as-is. Null values are dropped."
            )
        ),
    ],
) -> str:
    """Create a new Backlog issue.

    Args:
        ctx: The FastMCP context.
        project_key: Project to create the issue in.
        issue: Issue fields.

    Returns:
        JSON object with the new issue_key.
    """
    params = CreateIssueInput(project_key=project_key, issue=issue)
    async with backlog_fetcher(ctx) as backlog:
        created = await asyncio.to_thread(
            backlog.create_issue, params.project_key, params.issue.to_request_payload()
        )
    return _dumps({"issue_key": created.issue_key})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def update_issue(
    ctx: Context,
    issue_id_or_key: Annotated[
        str, Field(description="Issue key (e.g., 'PROJ-123') or numeric issue id")
    ],
    updates: Annotated[
        dict[str, Any],
        Field(
            description=(
                "Fields to change, e.g. {'summary': 'New title', 'statusId': 2}. "
                "At least one non-null field is required."
            )
        ),
    ],
) -> str:
    """Update fields of an existing Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id_or_key: Issue key or id.
        updates: Fields to change.

    Returns:
        JSON object with the issue_key of the updated issue.
    """
    params = UpdateIssueInput(issue_id_or_key=issue_id_or_key, updates=updates)
    async with backlog_fetcher(ctx) as backlog:
        updated = await asyncio.to_thread(
            backlog.update_issue,
            params.issue_id_or_key,
            params.updates.to_request_payload(),
        )
    return _dumps({"issue_key": updated.issue_key})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def delete_issue(
    ctx: Context,
    issue_id_or_key: Annotated[
        str, Field(description="Issue key (e.g., 'PROJ-123') or numeric issue id")
    ],
) -> str:
    """Delete a Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id_or_key: Issue key or id.

    Returns:
        JSON object confirming the deletion.
    """
    params = IssueRefInput(issue_id_or_key=issue_id_or_key)
    async with backlog_fetcher(ctx) as backlog:
        await asyncio.to_thread(backlog.delete_issue, params.issue_id_or_key)
    return _dumps({"status": "deleted", "issue_key": params.issue_id_or_key})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def transition_issue(
    ctx: Context,
    issue_id_or_key: Annotated[
        str, Field(description="Issue key (e.g., 'PROJ-123') or numeric issue id")
    ],
    status_id: Annotated[int, Field(description="Id of the target status")],
    comment: Annotated[
        str | None,
        Field(description="Optional comment recorded with the change", default=None),
    ] = None,
) -> str:
    """Move a Backlog issue to another status.

    Whether the move is allowed is decided by Backlog's workflow.

    Args:
        ctx: The FastMCP context.
        issue_id_or_key: Issue key or id.
        status_id: Target status id.
        comment: Optional comment.

    Returns:
        JSON object with the issue_key and its resulting status name.
    """
    params = TransitionIssueInput(
        issue_id_or_key=issue_id_or_key, status_id=status_id, comment=comment
    )
    async with backlog_fetcher(ctx) as backlog:
        issue = await asyncio.to_thread(
            backlog.transition_issue,
            params.issue_id_or_key,
            params.status_id,
            params.comment,
        )
    return _dumps({"issue_key": issue.issue_key, "status": issue.status_name})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
async def issues(
    ctx: Context,
    project_key: Annotated[
        str, Field(description="Backlog project key (e.g., 'PROJ')")
    ],
    action: Annotated[
        Literal["list", "create"],
        Field(description="'list' to browse issues, 'create' to add one", default="list"),
    ] = "list",
    issue: Annotated[
        dict[str, Any] | None,
        Field(
            description="Issue fields, required for 'create' ('summary' is mandatory)",
            default=None,
        ),
    ] = None,
    keyword: Annotated[
        str | None,
        Field(description="Optional keyword filter for 'list'", default=None),
    ] = None,
    offset: OffsetArg = None,
    limit: LimitArg = None,
) -> str:
    """List or create Backlog issues in one tool.

    Args:
        ctx: The FastMCP context.
        project_key: Backlog project key.
        action: 'list' or 'create'.
        issue: Issue fields for 'create'.
        keyword: Keyword filter for 'list'.
        offset: Pagination offset for 'list'.
        limit: Page size for 'list'.

    Returns:
        For 'list', JSON with issues and next_offset. For 'create', JSON with issue_key.
    """
    params = IssuesInput(
        project_key=project_key,
        action=action,
        issue=issue,
        keyword=keyword,
        offset=offset,
        limit=limit,
    )
    if params.action == "create":
        ensure_write_access(ctx, "issues", "create issue")
        async with backlog_fetcher(ctx) as backlog:
            created = await asyncio.to_thread(
                backlog.create_issue,
                params.project_key,
                params.issue.to_request_payload(),
            )
        return _dumps({"issue_key": created.issue_key})

    pagination = params.pagination()
    async with backlog_fetcher(ctx) as backlog:
        found = await asyncio.to_thread(
            backlog.list_issues,
            params.project_key,
            keyword=params.keyword,
            count=pagination.limit if pagination else None,
            offset=pagination.offset if pagination else None,
        )
    return _dumps(
        {
            "issues": [item.to_list_item_dict() for item in found],
            "next_offset": compute_next_offset(pagination, len(found)),
        }
    )


# Comments


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def list_comments(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Numeric id of the issue")],
    offset: OffsetArg = None,
    limit: LimitArg = None,
) -> str:
    """List comments of a Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Numeric issue id.
        offset: Pagination offset.
        limit: Page size.

    Returns:
        JSON with comments and next_offset (null when no further page is expected).
    """
    params = ListCommentsInput(issue_id=issue_id, offset=offset, limit=limit)
    pagination = params.pagination()
    async with backlog_fetcher(ctx) as backlog:
        comments = await asyncio.to_thread(
            backlog.list_comments, params.issue_id, pagination
        )
    return _dumps(
        {
            "comments": [comment.to_simplified_dict() for comment in comments],
            "next_offset": compute_next_offset(pagination, len(comments)),
        }
    )


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def add_comment(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Numeric id of the issue")],
    comment: Annotated[
        dict[str, Any],
        Field(
            description=(
                "Comment fields: 'content' (required) and optional "
                "'notifiedUserIds' (list of user ids to notify)."
            )
        ),
    ],
) -> str:
    """Add a comment to a Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Numeric issue id.
        comment: Comment fields.

    Returns:
        JSON with the created comment.
    """
    params = AddCommentInput(issue_id=issue_id, comment=comment)
    async with backlog_fetcher(ctx) as backlog:
        created = await asyncio.to_thread(
            backlog.add_comment, params.issue_id, params.comment.to_request_payload()
        )
    return _dumps({"comment": created.to_simplified_dict()})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def update_comment(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Numeric id of the issue")],
    comment_id: Annotated[int, Field(description="Numeric id of the comment")],
    updates: Annotated[
        dict[str, Any],
        Field(description="Fields to change, e.g. {'content': 'Edited text'}"),
    ],
) -> str:
    """Edit a comment on a Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Numeric issue id.
        comment_id: Numeric comment id.
        updates: Fields to change.

    Returns:
        JSON with the updated comment.
    """
    params = UpdateCommentInput(
        issue_id=issue_id, comment_id=comment_id, updates=updates
    )
    async with backlog_fetcher(ctx) as backlog:
        updated = await asyncio.to_thread(
            backlog.update_comment,
            params.issue_id,
            params.comment_id,
            params.updates.to_request_payload(),
        )
    return _dumps({"comment": updated.to_simplified_dict()})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def delete_comment(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Numeric id of the issue")],
    comment_id: Annotated[int, Field(description="Numeric id of the comment")],
) -> str:
    """Delete a comment from a Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Numeric issue id.
        comment_id: Numeric comment id.

    Returns:
        JSON object confirming the deletion.
    """
    params = CommentRefInput(issue_id=issue_id, comment_id=comment_id)
    async with backlog_fetcher(ctx) as backlog:
        await asyncio.to_thread(
            backlog.delete_comment, params.issue_id, params.comment_id
        )
    return _dumps(
        {
            "status": "deleted",
            "issue_id": params.issue_id,
            "comment_id": params.comment_id,
        }
    )


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
async def comments(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Numeric id of the issue")],
    action: Annotated[
        Literal["list", "create"],
        Field(description="'list' to browse comments, 'create' to add one", default="list"),
    ] = "list",
    comment: Annotated[
        dict[str, Any] | None,
        Field(
            description="Comment fields, required for 'create' ('content' is mandatory)",
            default=None,
        ),
    ] = None,
    offset: OffsetArg = None,
    limit: LimitArg = None,
) -> str:
    """List or create comments of a Backlog issue in one tool.

    Args:
        ctx: The FastMCP context.
        issue_id: Numeric issue id.
        action: 'list' or 'create'.
        comment: Comment fields for 'create'.
        offset: Pagination offset for 'list'.
        limit: Page size for 'list'.

    Returns:
        For 'list', JSON with comments and next_offset. For 'create', JSON with the comment.
    """
    params = CommentsInput(
        issue_id=issue_id, action=action, comment=comment, offset=offset, limit=limit
    )
    if params.action == "create":
        ensure_write_access(ctx, "comments", "create comment")
        async with backlog_fetcher(ctx) as backlog:
            created = await asyncio.to_thread(
                backlog.add_comment, params.issue_id, params.comment.to_request_payload()
            )
        return _dumps({"comment": created.to_simplified_dict()})

    pagination = params.pagination()
    async with backlog_fetcher(ctx) as backlog:
        found = await asyncio.to_thread(backlog.list_comments, params.issue_id, pagination)
    return _dumps(
        {
            "comments": [item.to_simplified_dict() for item in found],
            "next_offset": compute_next_offset(pagination, len(found)),
        }
    )


# Attachments


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
async def attachments(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Numeric id of the issue")],
    action: Annotated[
        Literal["list", "upload", "delete"],
        Field(description="'list', 'upload' or 'delete'", default="list"),
    ] = "list",
    attachment: Annotated[
        dict[str, Any] | None,
        Field(
            description=(
                "File to upload, required for 'upload': 'fileName', 'contentType' "
                "and base64 encoded 'data'."
            ),
            default=None,
        ),
    ] = None,
    attachment_id: Annotated[
        int | None,
        Field(description="Attachment id, required for 'delete'", default=None),
    ] = None,
) -> str:
    """List, upload or delete attachments of a Backlog issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Numeric issue id.
        action: 'list', 'upload' or 'delete'.
        attachment: File payload for 'upload'.
        attachment_id: Attachment id for 'delete'.

    Returns:
        JSON with attachments, the uploaded attachment, or a deletion confirmation.
    """
    params = AttachmentsInput(
        issue_id=issue_id,
        action=action,
        attachment=attachment,
        attachment_id=attachment_id,
    )
    if params.action != "list":
        ensure_write_access(ctx, "attachments", f"{params.action} attachment")
    async with backlog_fetcher(ctx) as backlog:
        if params.action == "upload":
            uploaded = await asyncio.to_thread(
                backlog.upload_attachment,
                params.issue_id,
                params.attachment.to_request_payload(),
            )
            return _dumps({"attachment": uploaded.to_simplified_dict()})

        if params.action == "delete":
            await asyncio.to_thread(
                backlog.delete_attachment, params.issue_id, params.attachment_id
            )
            return _dumps(
                {
                    "status": "deleted",
                    "issue_id": params.issue_id,
                    "attachment_id": params.attachment_id,
                }
            )

        found = await asyncio.to_thread(backlog.list_attachments, params.issue_id)
    return _dumps({"attachments": [item.to_simplified_dict() for item in found]})


# Activities


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def list_activities(
    ctx: Context,
    project_key: Annotated[
        str, Field(description="Backlog project key (e.g., 'PROJ')")
    ],
    offset: OffsetArg = None,
    limit: LimitArg = None,
) -> str:
    """List recent activities of a Backlog project.

    Args:
        ctx: The FastMCP context.
        project_key: Backlog project key.
        offset: Pagination offset.
        limit: Page size.

    Returns:
        JSON with activities and next_offset.
    """
    params = ListActivitiesInput(project_key=project_key, offset=offset, limit=limit)
    pagination = params.pagination()
    async with backlog_fetcher(ctx) as backlog:
        found = await asyncio.to_thread(
            backlog.list_activities, params.project_key, pagination
        )
    return _dumps(
        {
            "activities": [item.to_simplified_dict() for item in found],
            "next_offset": compute_next_offset(pagination, len(found)),
        }
    )


# Wiki


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def list_wiki_pages(
    ctx: Context,
    project_key_or_id: Annotated[
        str, Field(description="Backlog project key (e.g., 'PROJ') or numeric id")
    ],
    offset: OffsetArg = None,
    limit: LimitArg = None,
) -> str:
    """List wiki pages of a Backlog project.

    Args:
        ctx: The FastMCP context.
        project_key_or_id: Project key or id.
        offset: Pagination offset.
        limit: Page size.

    Returns:
        JSON with wiki_pages and next_offset.
    """
    params = ListWikiPagesInput(
        project_key_or_id=project_key_or_id, offset=offset, limit=limit
    )
    pagination = params.pagination()
    async with backlog_fetcher(ctx) as backlog:
        pages = await asyncio.to_thread(
            backlog.list_wiki_pages, params.project_key_or_id, pagination
        )
    return _dumps(
        {
            "wiki_pages": [page.to_simplified_dict() for page in pages],
            "next_offset": compute_next_offset(pagination, len(pages)),
        }
    )


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def search_wiki_pages(
    ctx: Context,
    project_key_or_id: Annotated[
        str, Field(description="Backlog project key (e.g., 'PROJ') or numeric id")
    ],
    keyword: Annotated[
        str | None,
        Field(description="Keyword matched against page names and content", default=None),
    ] = None,
    offset: OffsetArg = None,
    limit: LimitArg = None,
) -> str:
    """Search wiki pages of a Backlog project by keyword.

    Args:
        ctx: The FastMCP context.
        project_key_or_id: Project key or id.
        keyword: Search keyword.
        offset: Pagination offset.
        limit: Page size.

    Returns:
        JSON with wiki_pages and next_offset.
    """
    params = SearchWikiPagesInput(
        project_key_or_id=project_key_or_id,
        keyword=keyword,
        offset=offset,
        limit=limit,
    )
    pagination = params.pagination()
    async with backlog_fetcher(ctx) as backlog:
        pages = await asyncio.to_thread(
            backlog.search_wiki_pages,
            params.project_key_or_id,
            params.keyword,
            pagination,
        )
    return _dumps(
        {
            "wiki_pages": [page.to_simplified_dict() for page in pages],
            "next_offset": compute_next_offset(pagination, len(pages)),
        }
    )


@backlog_mcp.tool(tags={"backlog", "read"})
@handle_tool_errors
async def get_wiki_page(
    ctx: Context,
    wiki_id: Annotated[int, Field(description="Numeric id of the wiki page")],
) -> str:
    """Get a Backlog wiki page including its content.

    Args:
        ctx: The FastMCP context.
        wiki_id: Wiki page id.

    Returns:
        JSON with the wiki_page.
    """
    params = WikiRefInput(wiki_id=wiki_id)
    async with backlog_fetcher(ctx) as backlog:
        page = await asyncio.to_thread(backlog.get_wiki_page, params.wiki_id)
    return _dumps({"wiki_page": page.to_simplified_dict()})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def create_wiki_page(
    ctx: Context,
    project_id: Annotated[int, Field(description="Numeric id of the project")],
    name: Annotated[str, Field(description="Title of the wiki page")],
    content: Annotated[
        str | None, Field(description="Page body (Backlog wiki markup)", default=None)
    ] = None,
    mail_notify: Annotated[
        bool | None,
        Field(description="Whether to notify project members by mail", default=None),
    ] = None,
) -> str:
    """Create a Backlog wiki page.

    Args:
        ctx: The FastMCP context.
        project_id: Project id.
        name: Page title.
        content: Page body.
        mail_notify: Whether to send notifications.

    Returns:
        JSON with the created wiki_page.
    """
    payload = WikiCreatePayload(
        project_id=project_id, name=name, content=content, mail_notify=mail_notify
    )
    async with backlog_fetcher(ctx) as backlog:
        page = await asyncio.to_thread(
            backlog.create_wiki_page, payload.to_request_payload()
        )
    return _dumps({"wiki_page": page.to_simplified_dict()})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def update_wiki_page(
    ctx: Context,
    wiki_id: Annotated[int, Field(description="Numeric id of the wiki page")],
    updates: Annotated[
        dict[str, Any],
        Field(
            description=(
                "Fields to change: 'name', 'content' and/or 'mailNotify'. "
                "At least one non-null field is required."
            )
        ),
    ],
) -> str:
    """Update a Backlog wiki page.

    Args:
        ctx: The FastMCP context.
        wiki_id: Wiki page id.
        updates: Fields to change.

    Returns:
        JSON with the updated wiki_page.
    """
    params = UpdateWikiPageInput(wiki_id=wiki_id, updates=updates)
    async with backlog_fetcher(ctx) as backlog:
        page = await asyncio.to_thread(
            backlog.update_wiki_page, params.wiki_id, params.updates.to_request_payload()
        )
    return _dumps({"wiki_page": page.to_simplified_dict()})


@backlog_mcp.tool(tags={"backlog", "write"})
@handle_tool_errors
@check_write_access
async def delete_wiki_page(
    ctx: Context,
    wiki_id: Annotated[int, Field(description="Numeric id of the wiki page")],
) -> str:
    """Delete a Backlog wiki page.

    Args:
        ctx: The FastMCP context.
        wiki_id: Wiki page id.

    Returns:
        JSON object confirming the deletion.
    """
    params = WikiRefInput(wiki_id=wiki_id)
    async with backlog_fetcher(ctx) as backlog:
        await asyncio.to_thread(backlog.delete_wiki_page, params.wiki_id)
    return _dumps({"status": "deleted", "wiki_id": params.wiki_id})
