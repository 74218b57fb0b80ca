"""
Backlog project activity models.
"""

from typing import Any

from pydantic import Field, StrictInt

from ..base import ApiModel
from .common import BacklogProject, BacklogUser, user_reference


class BacklogActivity(ApiModel):
    """
    Model representing an entry of a project's activity feed.

    ``content`` varies with the activity ``type`` and is passed through as-is.
    """

    id: StrictInt
    type: StrictInt | None = None
    project: BacklogProject | None = None
    created_user: BacklogUser | None = Field(default=None, alias="createdUser")
    created: str | None = None
    content: dict[str, Any] | None = None

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "project": self.project.to_simplified_dict() if self.project else None,
            "created_by": user_reference(self.created_user),
            "created": self.created,
            "content": self.content,
        }
