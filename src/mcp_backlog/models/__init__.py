"""
Pydantic models for Backlog API responses and tool inputs.
"""

from .backlog import (
    BacklogActivity,
    BacklogAttachment,
    BacklogComment,
    BacklogIssue,
    BacklogProject,
    BacklogStatus,
    BacklogTag,
    BacklogUser,
    BacklogWikiPage,
)
from .base import ApiModel

__all__ = [
    "ApiModel",
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
