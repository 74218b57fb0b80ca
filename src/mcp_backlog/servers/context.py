from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_backlog.backlog.config import BacklogConfig


@dataclass(frozen=True)
class MainAppContext:
    """
    Context holding the Backlog configuration loaded from environment
    variables at server startup, plus the tool filtering flags.
    """

    full_backlog_config: BacklogConfig | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
