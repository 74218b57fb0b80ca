"""
Backlog attachment models.
"""

from typing import Any

from pydantic import Field, StrictInt

from ..base import ApiModel
from .common import BacklogUser, user_reference


class BacklogAttachment(ApiModel):
    """
    Model representing a file attached to a Backlog issue.
    """

    id: StrictInt
    name: str
    size: StrictInt | None = None
    created_user: BacklogUser | None = Field(default=None, alias="createdUser")
    created: str | None = None

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "created": self.created,
            "created_by": user_reference(self.created_user),
        }
