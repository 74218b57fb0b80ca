"""
Common Backlog entity models.

Users, statuses, projects and tags appear nested inside issues, comments,
attachments, wiki pages and activities.
"""

from typing import Any

from pydantic import Field, StrictInt

from ..base import ApiModel


class BacklogUser(ApiModel):
    """
    Model representing a Backlog user reference.
    """

    id: StrictInt | None = None
    user_id: str | None = Field(default=None, alias="userId")
    name: str | None = None

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to the ``{id, name}`` reference used in tool results."""
        return {"id": self.id, "name": self.name}


class BacklogStatus(ApiModel):
    id: StrictInt | None = None
    name: str | None = None


class BacklogProject(ApiModel):
    id: StrictInt | None = None
    project_key: str | None = Field(default=None, alias="projectKey")
    name: str | None = None

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"id": self.id, "key": self.project_key, "name": self.name}


class BacklogTag(ApiModel):
    id: StrictInt | None = None
    name: str | None = None


def user_reference(user: BacklogUser | None) -> dict[str, Any] | None:
    """Project an optional user onto ``{id, name}`` or None."""
    return user.to_simplified_dict() if user is not None else None
