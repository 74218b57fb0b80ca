"""
Backlog comment models.
"""

from typing import Any

from pydantic import Field, StrictInt

from ..base import ApiModel
from .common import BacklogUser, user_reference


class BacklogComment(ApiModel):
    """
    Model representing a comment on a Backlog issue.
    """

    id: StrictInt
    content: str | None = None
    created_user: BacklogUser | None = Field(default=None, alias="createdUser")
    created: str | None = None
    updated: str | None = None

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "author": user_reference(self.created_user),
            "created": self.created,
            "updated": self.updated,
        }
