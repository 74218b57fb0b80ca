"""Module for Backlog issue comment operations."""

import logging
from typing import Any

from ..models.backlog import BacklogComment
from ..utils.pagination import PaginationOptions, build_pagination_params
from .client import BacklogClient
from .utils import encode_path_segment, strip_none_values

logger = logging.getLogger("mcp-backlog")


class CommentsMixin(BacklogClient):
    """Mixin for Backlog comment operations."""

    def _comments_path(self, issue_id: int) -> str:
        return f"/issues/{encode_path_segment(issue_id)}/comments"

    def list_comments(
        self, issue_id: int, pagination: PaginationOptions | None = None
    ) -> list[BacklogComment]:
        """
        List the comments of an issue.

        Args:
            issue_id: Numeric issue id
            pagination: Normalized pagination options

        Returns:
            List of validated comments
        """
        data = self.get(
            self._comments_path(issue_id),
            query=build_pagination_params(pagination),
        )
        return BacklogComment.from_api_list(data)

    def add_comment(self, issue_id: int, payload: dict[str, Any]) -> BacklogComment:
        data = self.post(
            self._comments_path(issue_id), payload=strip_none_values(payload)
        )
        return BacklogComment.from_api_response(data)

    def update_comment(
        self, issue_id: int, comment_id: int, payload: dict[str, Any]
    ) -> BacklogComment:
        data = self.patch(
            f"{self._comments_path(issue_id)}/{encode_path_segment(comment_id)}",
            payload=strip_none_values(payload),
        )
        return BacklogComment.from_api_response(data)

    def delete_comment(self, issue_id: int, comment_id: int) -> None:
        self.delete(
            f"{self._comments_path(issue_id)}/{encode_path_segment(comment_id)}"
        )
        logger.info(f"Deleted comment {comment_id} from Backlog issue {issue_id}")
