"""
Backlog wiki page models.
"""

from typing import Any

from pydantic import Field, StrictInt, field_validator

from ..base import ApiModel
from .common import BacklogTag, BacklogUser, user_reference


class BacklogWikiPage(ApiModel):
    """
    Model representing a Backlog wiki page.

    Listings omit ``content``; single-page endpoints include it.
    """

    id: StrictInt
    project_id: StrictInt | None = Field(default=None, alias="projectId")
    name: str
    content: str | None = None
    tags: list[BacklogTag] = Field(default_factory=list)
    created_user: BacklogUser | None = Field(default=None, alias="createdUser")
    created: str | None = None
    updated_user: BacklogUser | None = Field(default=None, alias="updatedUser")
    updated: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def tag_names(self) -> list[str]:
        """Tag names, skipping tags with an empty or blank name."""
        return [tag.name for tag in self.tags if tag.name and tag.name.strip()]

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "name": self.name,
            "content": self.content,
            "tags": self.tag_names,
            "created_by": user_reference(self.created_user),
            "created": self.created,
            "updated_by": user_reference(self.updated_user),
            "updated": self.updated,
        }
