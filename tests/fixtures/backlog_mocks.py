"""Sample Backlog API payloads shared by the unit tests."""

from unittest.mock import MagicMock

MOCK_BACKLOG_USER = {
    "id": 11,
    "userId": "alice",
    "name": "Alice Example",
    "roleType": 1,
    "mailAddress": "alice@example.com",
}

MOCK_BACKLOG_ISSUE = {
    "id": 1001,
    "projectId": 7,
    "issueKey": "PROJ-1",
    "keyId": 1,
    "issueType": {"id": 2, "name": "Task"},
    "summary": "First issue",
    "description": "Something to do",
    "priority": {"id": 3, "name": "Normal"},
    "status": {"id": 1, "name": "Open"},
    "assignee": {"id": 11, "userId": "alice", "name": "Alice Example"},
    "created": "2024-01-01T10:00:00Z",
    "updated": "2024-01-02T10:00:00Z",
}

MOCK_BACKLOG_ISSUE_MINIMAL = {
    "id": 1002,
    "issueKey": "PROJ-2",
    "summary": "Bare issue",
}

MOCK_BACKLOG_ISSUES = [MOCK_BACKLOG_ISSUE, MOCK_BACKLOG_ISSUE_MINIMAL]

MOCK_BACKLOG_COMMENTS = [
    {
        "id": 501,
        "content": "First comment",
        "createdUser": MOCK_BACKLOG_USER,
        "created": "2024-01-03T10:00:00Z",
        "updated": "2024-01-03T11:00:00Z",
        "stars": [],
        "notifications": [],
    },
    {
        "id": 502,
        "content": None,
        "createdUser": None,
        "created": "2024-01-04T10:00:00Z",
        "updated": None,
    },
]

MOCK_BACKLOG_ATTACHMENT = {
    "id": 8,
    "name": "design.pdf",
    "size": 2048,
    "createdUser": MOCK_BACKLOG_USER,
    "created": "2024-01-05T10:00:00Z",
}

MOCK_BACKLOG_WIKI_PAGE = {
    "id": 77,
    "projectId": 7,
    "name": "Home",
    "content": "# Welcome",
    "tags": [{"id": 1, "name": "docs"}, {"id": 2, "name": "  "}, {"id": 3}],
    "attachments": [],
    "sharedFiles": [],
    "stars": [],
    "createdUser": MOCK_BACKLOG_USER,
    "created": "2024-01-06T10:00:00Z",
    "updatedUser": {"id": 12, "userId": "bob", "name": "Bob Example"},
    "updated": "2024-01-07T10:00:00Z",
}

MOCK_BACKLOG_ACTIVITY = {
    "id": 3153,
    "project": {"id": 7, "projectKey": "PROJ", "name": "Project"},
    "type": 2,
    "content": {
        "id": 1001,
        "key_id": 1,
        "summary": "First issue",
        "changes": [{"field": "status", "new_value": "2", "old_value": "1"}],
    },
    "notifications": [],
    "createdUser": MOCK_BACKLOG_USER,
    "created": "2024-01-08T10:00:00Z",
}


def make_response(status_code=200, json_data=None, text=""):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    response.json.return_value = json_data
    return response
