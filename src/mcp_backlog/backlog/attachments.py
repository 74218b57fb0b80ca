"""Module for Backlog issue attachment operations."""

import logging
from typing import Any

from ..models.backlog import BacklogAttachment
from .client import BacklogClient
from .utils import encode_path_segment, strip_none_values

logger = logging.getLogger("mcp-backlog")


class AttachmentsMixin(BacklogClient):
    """Mixin for Backlog attachment operations."""

    def _attachments_path(self, issue_id: int) -> str:
        return f"/issues/{encode_path_segment(issue_id)}/attachments"

    def list_attachments(self, issue_id: int) -> list[BacklogAttachment]:
        data = self.get(self._attachments_path(issue_id))
        return BacklogAttachment.from_api_list(data)

    def upload_attachment(
        self, issue_id: int, payload: dict[str, Any]
    ) -> BacklogAttachment:
        """
        Attach a file to an issue.

        Args:
            issue_id: Numeric issue id
            payload: ``fileName``, ``contentType`` and base64 ``data`` plus any extra keys

        Returns:
            The stored attachment
        """
        data = self.post(
            self._attachments_path(issue_id), payload=strip_none_values(payload)
        )
        attachment = BacklogAttachment.from_api_response(data)
        logger.info(f"Uploaded attachment {attachment.name} to Backlog issue {issue_id}")
        return attachment

    def delete_attachment(self, issue_id: int, attachment_id: int) -> None:
        self.delete(
            f"{self._attachments_path(issue_id)}/{encode_path_segment(attachment_id)}"
        )
        logger.info(f"Deleted attachment {attachment_id} from Backlog issue {issue_id}")
