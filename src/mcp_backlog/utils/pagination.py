"""Pagination helpers shared by the Backlog list tools.

Backlog pages with ``offset``/``count`` query parameters. Tools accept a looser
``offset``/``limit`` pair from clients, which is sanitized here before it
reaches the wire.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PaginationOptions:
    """Sanitized pagination request. Either field may be absent."""

    offset: int | None = None
    limit: int | None = None


def _as_finite_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def normalize_pagination(
    options: Mapping[str, Any] | PaginationOptions | None,
) -> PaginationOptions | None:
    """Floor and clamp client supplied pagination values.

    Args:
        options: Mapping (or existing options) with optional ``offset`` and ``limit``

    Returns:
        ``None`` when no options were given, otherwise a PaginationOptions where
        ``offset`` is at least 0 and ``limit`` at least 1. Values that are not
        finite numbers are dropped.
    """
    if options is None:
        return None
    if isinstance(options, PaginationOptions):
        raw_offset, raw_limit = options.offset, options.limit
    else:
        raw_offset, raw_limit = options.get("offset"), options.get("limit")

    offset = _as_finite_number(raw_offset)
    limit = _as_finite_number(raw_limit)

    return PaginationOptions(
        offset=max(0, math.floor(offset)) if offset is not None else None,
        limit=max(1, math.floor(limit)) if limit is not None else None,
    )


def build_pagination_params(
    options: PaginationOptions | None,
) -> dict[str, int] | None:
    """Translate normalized options into Backlog query parameters.

    Returns:
        ``{"offset": ..., "count": ...}`` with only the present keys, or ``None``
        when nothing is left to send.
    """
    if options is None:
        return None

    params: dict[str, int] = {}
    if options.offset is not None:
        params["offset"] = options.offset
    if options.limit is not None:
        params["count"] = options.limit
    return params or None


def compute_next_offset(
    options: PaginationOptions | None, item_count: int
) -> int | None:
    """Return the offset of the next page, or ``None`` when this page was short.

    A full page (exactly ``limit`` items) is taken as a hint that more data may
    exist; it is not a guarantee.
    """
    if options is None or options.limit is None:
        return None
    if item_count != options.limit:
        return None
    return (options.offset or 0) + options.limit
