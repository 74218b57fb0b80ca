"""Module for Backlog wiki operations."""

import logging
from typing import Any

from ..models.backlog import BacklogWikiPage
from ..utils.pagination import PaginationOptions, build_pagination_params
from .client import BacklogClient
from .utils import encode_path_segment, strip_none_values

logger = logging.getLogger("mcp-backlog")


class WikisMixin(BacklogClient):
    """Mixin for Backlog wiki page operations."""

    def list_wiki_pages(
        self, project_key_or_id: str, pagination: PaginationOptions | None = None
    ) -> list[BacklogWikiPage]:
        """
        List the wiki pages of a project.

        Args:
            project_key_or_id: Project key or numeric project id
            pagination: Normalized pagination options

        Returns:
            List of validated wiki pages (without content)
        """
        data = self.get(
            f"/projects/{encode_path_segment(project_key_or_id)}/wikis",
            query=build_pagination_params(pagination),
        )
        return BacklogWikiPage.from_api_list(data)

    def search_wiki_pages(
        self,
        project_key_or_id: str,
        keyword: str | None = None,
        pagination: PaginationOptions | None = None,
    ) -> list[BacklogWikiPage]:
        """Search wiki pages of a project by keyword."""
        query: dict[str, Any] = {"projectIdOrKey": project_key_or_id, "keyword": keyword}
        query.update(build_pagination_params(pagination) or {})
        data = self.get("/wikis", query=query)
        return BacklogWikiPage.from_api_list(data)

    def get_wiki_page(self, wiki_id: int) -> BacklogWikiPage:
        data = self.get(f"/wikis/{encode_path_segment(wiki_id)}")
        return BacklogWikiPage.from_api_response(data)

    def create_wiki_page(self, payload: dict[str, Any]) -> BacklogWikiPage:
        """
        Create a wiki page.

        Args:
            payload: ``projectId``, ``name`` and optional ``content``/``mailNotify``

        Returns:
            The created wiki page
        """
        data = self.post("/wikis", payload=strip_none_values(payload))
        page = BacklogWikiPage.from_api_response(data)
        logger.info(f"Created Backlog wiki page {page.id} ({page.name})")
        return page

    def update_wiki_page(
        self, wiki_id: int, payload: dict[str, Any]
    ) -> BacklogWikiPage:
        data = self.patch(
            f"/wikis/{encode_path_segment(wiki_id)}",
            payload=strip_none_values(payload),
        )
        return BacklogWikiPage.from_api_response(data)

    def delete_wiki_page(self, wiki_id: int) -> None:
        self.delete(f"/wikis/{encode_path_segment(wiki_id)}")
        logger.info(f"Deleted Backlog wiki page {wiki_id}")
