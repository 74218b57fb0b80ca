"""Test fixtures for Backlog unit tests."""

from unittest.mock import MagicMock

import pytest

from mcp_backlog.backlog.client import BacklogClient
from mcp_backlog.backlog.config import BacklogConfig
from tests.fixtures.backlog_mocks import make_response


@pytest.fixture
def backlog_config():
    """Create a BacklogConfig pointing at a fake space."""
    return BacklogConfig(
        url="https://example.backlog.com/api/v2",
        api_key="test-api-key",
    )


@pytest.fixture
def backlog_client(backlog_config):
    """Create a BacklogClient whose HTTP session is mocked."""
    client = BacklogClient(config=backlog_config)
    client.session = MagicMock()
    client.session.request.return_value = make_response(json_data={})
    return client


@pytest.fixture
def mock_transport():
    """Return a helper replacing the HTTP verb methods of a client with mocks."""

    def _mock(client):
        client.get = MagicMock()
        client.post = MagicMock()
        client.patch = MagicMock()
        client.delete = MagicMock(return_value=None)
        return client

    return _mock
