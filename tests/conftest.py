"""
Root pytest configuration file for MCP Backlog tests.
"""

import os
from unittest.mock import patch

import pytest


@pytest.fixture
def backlog_env():
    """Environment with the minimal Backlog configuration."""
    with patch.dict(
        os.environ,
        {
            "BACKLOG_BASE_URL": "https://example.backlog.com/api/v2",
            "BACKLOG_API_KEY": "test-api-key",
        },
        clear=True,
    ):
        yield
