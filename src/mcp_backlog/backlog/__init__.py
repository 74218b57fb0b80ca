"""Backlog API module for mcp_backlog.

This module provides the Backlog REST client and its resource mixins.
"""

from .activities import ActivitiesMixin
from .attachments import AttachmentsMixin
from .client import BacklogClient
from .comments import CommentsMixin
from .config import BacklogConfig
from .issues import IssuesMixin
from .wikis import WikisMixin


class BacklogFetcher(
    IssuesMixin,
    CommentsMixin,
    AttachmentsMixin,
    WikisMixin,
    ActivitiesMixin,
):
    """
    The main Backlog client class providing access to all Backlog operations.

    This class inherits from multiple mixins that provide specific functionality:
    - IssuesMixin: Issue listing, CRUD and status transitions
    - CommentsMixin: Issue comment operations
    - AttachmentsMixin: Issue attachment operations
    - WikisMixin: Wiki page listing, search and CRUD
    - ActivitiesMixin: Project activity feed
    """

    pass


__all__ = ["BacklogFetcher", "BacklogConfig", "BacklogClient"]
