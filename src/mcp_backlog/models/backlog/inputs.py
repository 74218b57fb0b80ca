"""
Tool input models for the Backlog MCP tools.

Every tool validates its arguments through one of these models before any
request is sent, so malformed input never reaches Backlog. Write payloads
accept extra keys and forward them verbatim; None values are never sent.
"""

from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    model_validator,
)

from mcp_backlog.backlog.utils import DOT_SEGMENTS
from mcp_backlog.utils.pagination import PaginationOptions, normalize_pagination


def _int_to_str(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _reject_dot_segment(value: str) -> str:
    if value in DOT_SEGMENTS:
        raise ValueError(f"'{value}' is not a valid Backlog identifier.")
    return value


def _clean_optional_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ProjectKey = Annotated[NonBlankStr, AfterValidator(_reject_dot_segment)]
PositiveId = Annotated[int, Field(strict=True, gt=0)]
IdOrKey = Annotated[
    str,
    BeforeValidator(_int_to_str),
    StringConstraints(strip_whitespace=True, min_length=1),
    AfterValidator(_reject_dot_segment),
]
OptionalText = Annotated[str | None, BeforeValidator(_clean_optional_text)]


class WritePayload(BaseModel):
    """Base for payloads sent to Backlog. Unknown keys pass through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_request_payload(self) -> dict[str, Any]:
        """Serialize with Backlog field names, dropping every None value."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UpdatePayload(WritePayload):
    """Payload for partial updates. At least one field must carry a value."""

    empty_message: ClassVar[str] = "At least one field must be provided to update."

    @model_validator(mode="after")
    def _require_one_field(self) -> "UpdatePayload":
        if not self.to_request_payload():
            raise ValueError(self.empty_message)
        return self


class IssuePayload(WritePayload):
    summary: NonBlankStr
    description: str | None = None


class IssueUpdatePayload(UpdatePayload):
    empty_message: ClassVar[str] = "At least one field must be provided to update the issue."

    summary: NonBlankStr | None = None
    description: str | None = None


class CommentPayload(WritePayload):
    content: NonBlankStr
    notified_user_ids: list[PositiveId] | None = Field(
        default=None, alias="notifiedUserIds"
    )


class CommentUpdatePayload(UpdatePayload):
    empty_message: ClassVar[str] = "At least one field must be provided to update the comment."

    content: NonBlankStr | None = None


class AttachmentPayload(WritePayload):
    file_name: NonBlankStr = Field(alias="fileName")
    content_type: NonBlankStr = Field(alias="contentType")
    data: NonBlankStr


class WikiCreatePayload(WritePayload):
    project_id: PositiveId = Field(alias="projectId")
    name: NonBlankStr
    content: str | None = None
    mail_notify: bool | None = Field(default=None, alias="mailNotify")


class WikiUpdatePayload(UpdatePayload):
    empty_message: ClassVar[str] = "At least one field must be provided to update the wiki page."

    name: NonBlankStr | None = None
    content: str | None = None
    mail_notify: bool | None = Field(default=None, alias="mailNotify")


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PaginatedInput(ToolInput):
    """Mixin for list tools. Values are sanitized, never rejected for range."""

    offset: float | None = None
    limit: float | None = None

    def pagination(self) -> PaginationOptions | None:
        if self.offset is None and self.limit is None:
            return None
        return normalize_pagination({"offset": self.offset, "limit": self.limit})


class ListIssuesInput(ToolInput):
    project_key: ProjectKey
    keyword: OptionalText = None
    count: PositiveId | None = None


class IssueRefInput(ToolInput):
    issue_id_or_key: IdOrKey


class CreateIssueInput(ToolInput):
    project_key: ProjectKey
    issue: IssuePayload


class UpdateIssueInput(IssueRefInput):
    updates: IssueUpdatePayload


class TransitionIssueInput(IssueRefInput):
    status_id: PositiveId
    comment: NonBlankStr | None = None


class IssuesInput(PaginatedInput):
    project_key: ProjectKey
    action: Literal["list", "create"] = "list"
    keyword: OptionalText = None
    issue: IssuePayload | None = None

    @model_validator(mode="after")
    def _require_payload_for_create(self) -> "IssuesInput":
        if self.action == "create" and self.issue is None:
            raise ValueError("Issue payload is required when creating a Backlog issue.")
        return self


class ListCommentsInput(PaginatedInput):
    issue_id: PositiveId


class AddCommentInput(ToolInput):
    issue_id: PositiveId
    comment: CommentPayload


class CommentRefInput(ToolInput):
    issue_id: PositiveId
    comment_id: PositiveId


class UpdateCommentInput(CommentRefInput):
    updates: CommentUpdatePayload


class CommentsInput(PaginatedInput):
    issue_id: PositiveId
    action: Literal["list", "create"] = "list"
    comment: CommentPayload | None = None

    @model_validator(mode="after")
    def _require_payload_for_create(self) -> "CommentsInput":
        if self.action == "create" and self.comment is None:
            raise ValueError(
                "Comment payload is required when creating a Backlog comment."
            )
        return self


class AttachmentsInput(ToolInput):
    issue_id: PositiveId
    action: Literal["list", "upload", "delete"] = "list"
    attachment: AttachmentPayload | None = None
    attachment_id: PositiveId | None = None

    @model_validator(mode="after")
    def _require_action_arguments(self) -> "AttachmentsInput":
        if self.action == "upload" and self.attachment is None:
            raise ValueError("Attachment payload is required when uploading to Backlog.")
        if self.action == "delete" and self.attachment_id is None:
            raise ValueError(
                "Attachment ID is required when deleting a Backlog attachment."
            )
        return self


class ListActivitiesInput(PaginatedInput):
    project_key: ProjectKey


class ListWikiPagesInput(PaginatedInput):
    project_key_or_id: IdOrKey


class SearchWikiPagesInput(ListWikiPagesInput):
    keyword: OptionalText = None


class WikiRefInput(ToolInput):
    wiki_id: PositiveId


class UpdateWikiPageInput(WikiRefInput):
    updates: WikiUpdatePayload
