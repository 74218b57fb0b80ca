from typing import Any

from fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError
from mcp.types import ErrorData


class BacklogError(Exception):
    """Base exception for errors raised while talking to Backlog.

    Args:
        message: Human readable description of the failure
        status: HTTP status code returned by Backlog, when known
        details: Upstream payload or structured context for the failure
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.details = details


class MCPBacklogAuthenticationError(BacklogError, ValueError):
    """Raised when Backlog credentials are missing before a request is sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status=401)


class BacklogRateLimitError(BacklogError):
    """Raised when Backlog answers with HTTP 429."""

    def __init__(self, message: str = "Backlog API rate limit exceeded.") -> None:
        super().__init__(message, status=429)


class BacklogRequestError(BacklogError):
    """Raised for any non-2xx Backlog response other than 429."""

    def __init__(self, status: int, details: Any = None) -> None:
        super().__init__(
            f"Backlog request failed with status {status}",
            status=status,
            details=details,
        )


class UnexpectedResponseError(BacklogError):
    """Raised when a Backlog response does not match the expected shape."""

    pass


class BacklogInputError(BacklogError, ValueError):
    """Raised when tool arguments are rejected before any request is sent."""

    def __init__(self, message: str, issues: list[dict[str, Any]] | None = None):
        super().__init__(message, details=issues)
        self.issues = issues or []


class BacklogToolError(McpError, ToolError):
    """MCP protocol error produced by the error classifier.

    Being a ToolError, FastMCP passes it through its tool manager unchanged.

    Attributes:
        category: Symbolic error category (e.g. ``UNAUTHENTICATED``)
    """

    def __init__(
        self,
        code: int,
        message: str,
        data: dict[str, Any] | None = None,
        *,
        category: str = "INTERNAL",
    ) -> None:
        super().__init__(ErrorData(code=code, message=message, data=data))
        self.category = category

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def data(self) -> Any:
        return self.error.data

    def to_error_data(self) -> ErrorData:
        """Error payload sent to MCP clients, with ``category`` added to ``data``."""
        return ErrorData(
            code=self.code,
            message=self.error.message,
            data={"category": self.category, **(self.data or {})},
        )
