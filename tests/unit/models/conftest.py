"""
Test fixtures for model testing.
"""

import copy
from typing import Any

import pytest

from tests.fixtures.backlog_mocks import (
    MOCK_BACKLOG_ACTIVITY,
    MOCK_BACKLOG_COMMENTS,
    MOCK_BACKLOG_ISSUE,
    MOCK_BACKLOG_WIKI_PAGE,
)


@pytest.fixture
def backlog_issue_data() -> dict[str, Any]:
    """Return a mutable copy of mock Backlog issue data."""
    return copy.deepcopy(MOCK_BACKLOG_ISSUE)


@pytest.fixture
def backlog_comments_data() -> list[dict[str, Any]]:
    return copy.deepcopy(MOCK_BACKLOG_COMMENTS)


@pytest.fixture
def backlog_wiki_page_data() -> dict[str, Any]:
    return copy.deepcopy(MOCK_BACKLOG_WIKI_PAGE)


@pytest.fixture
def backlog_activity_data() -> dict[str, Any]:
    return copy.deepcopy(MOCK_BACKLOG_ACTIVITY)
