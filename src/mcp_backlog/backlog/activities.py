"""Module for Backlog project activity operations."""

from ..models.backlog import BacklogActivity
from ..utils.pagination import PaginationOptions, build_pagination_params
from .client import BacklogClient
from .utils import encode_path_segment


class ActivitiesMixin(BacklogClient):
    """Mixin for Backlog activity feed operations."""

    def list_activities(
        self, project_key: str, pagination: PaginationOptions | None = None
    ) -> list[BacklogActivity]:
        """List recent activities of a project, newest first."""
        data = self.get(
            f"/projects/{encode_path_segment(project_key)}/activities",
            query=build_pagination_params(pagination),
        )
        return BacklogActivity.from_api_list(data)
