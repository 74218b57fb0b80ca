"""
Backlog data models for the MCP Backlog server.
"""

from .activity import BacklogActivity
from .attachment import BacklogAttachment
from .comment import BacklogComment
from .common import BacklogProject, BacklogStatus, BacklogTag, BacklogUser
from .issue import BacklogIssue
from .wiki import BacklogWikiPage

__all__ = [
    "BacklogActivity",
    "BacklogAttachment",
    "BacklogComment",
    "BacklogIssue",
    "BacklogProject",
    "BacklogStatus",
    "BacklogTag",
    "BacklogUser",
    "BacklogWikiPage",
]
