"""Module for Backlog issue operations."""

import logging
from typing import Any

from ..models.backlog import BacklogIssue
from .client import BacklogClient
from .utils import encode_path_segment, strip_none_values

logger = logging.getLogger("mcp-backlog")


class IssuesMixin(BacklogClient):
    """Mixin for Backlog issue operations."""

    def list_issues(
        self,
        project_key: str,
        keyword: str | None = None,
        count: int | None = None,
        offset: int | None = None,
    ) -> list[BacklogIssue]:
        """
        List the issues of a project.

        Args:
            project_key: The project key (e.g. 'PROJ')
            keyword: Optional full-text filter
            count: Maximum number of issues to return
            offset: Number of issues to skip

        Returns:
            List of validated issues
        """
        data = self.get(
            f"/projects/{encode_path_segment(project_key)}/issues",
            query={"keyword": keyword, "count": count, "offset": offset},
        )
        return BacklogIssue.from_api_list(data)

    def get_issue(self, issue_id_or_key: str) -> BacklogIssue:
        """Fetch one issue by numeric id or issue key (e.g. 'PROJ-1')."""
        data = self.get(f"/issues/{encode_path_segment(issue_id_or_key)}")
        return BacklogIssue.from_api_response(data)

    def create_issue(self, project_key: str, payload: dict[str, Any]) -> BacklogIssue:
        """
        Create an issue in a project.

        Args:
            project_key: The project key
            payload: Issue fields in Backlog's wire format; None values are dropped

        Returns:
            The created issue
        """
        data = self.post(
            f"/projects/{encode_path_segment(project_key)}/issues",
            payload=strip_none_values(payload),
        )
        issue = BacklogIssue.from_api_response(data)
        logger.info(f"Created Backlog issue {issue.issue_key} in {project_key}")
        return issue

    def update_issue(
        self, issue_id_or_key: str, payload: dict[str, Any]
    ) -> BacklogIssue:
        """Apply a partial update to an issue."""
        data = self.patch(
            f"/issues/{encode_path_segment(issue_id_or_key)}",
            payload=strip_none_values(payload),
        )
        return BacklogIssue.from_api_response(data)

    def delete_issue(self, issue_id_or_key: str) -> None:
        self.delete(f"/issues/{encode_path_segment(issue_id_or_key)}")
        logger.info(f"Deleted Backlog issue {issue_id_or_key}")

    def transition_issue(
        self, issue_id_or_key: str, status_id: int, comment: str | None = None
    ) -> BacklogIssue:
        """
        Move an issue to another status.

        Whether the transition is allowed is decided by Backlog; this only
        posts the target status id and an optional comment.

        Args:
            issue_id_or_key: Numeric id or issue key
            status_id: Target status id
            comment: Optional comment recorded with the transition

        Returns:
            The updated issue
        """
        data = self.post(
            f"/issues/{encode_path_segment(issue_id_or_key)}/status",
            payload=strip_none_values({"statusId": status_id, "comment": comment}),
        )
        return BacklogIssue.from_api_response(data)
