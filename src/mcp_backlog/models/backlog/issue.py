"""
Backlog issue models.
"""

from typing import Any

from pydantic import Field, StrictInt

from ..base import ApiModel
from .common import BacklogStatus, BacklogUser


class BacklogIssue(ApiModel):
    """
    Model representing a Backlog issue as returned by the REST API.

    Only ``id``, ``issueKey`` and ``summary`` are guaranteed; everything else
    may be missing or null depending on the endpoint and project settings.
    """

    id: StrictInt
    issue_key: str = Field(alias="issueKey")
    summary: str
    description: str | None = None
    status: BacklogStatus | None = None
    assignee: BacklogUser | None = None
    updated: str | None = None

    @property
    def status_name(self) -> str | None:
        return self.status.name if self.status else None

    @property
    def assignee_name(self) -> str | None:
        return self.assignee.name if self.assignee else None

    def to_list_item_dict(self) -> dict[str, Any]:
        """Convert to the compact shape used by issue listings."""
        return {
            "id": self.id,
            "issue_key": self.issue_key,
            "summary": self.summary,
            "status": self.status_name,
            "assignee": self.assignee_name,
            "updated": self.updated,
        }

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to the detailed shape returned by get_issue."""
        return {
            "id": self.id,
            "issue_key": self.issue_key,
            "summary": self.summary,
            "description": self.description,
            "status": self.status_name,
            "assignee": self.assignee_name,
        }
