"""
Query-string pagination parsing.

Page and limit arrive as raw strings. They are parsed leniently (the
leading integer wins, so "2abc" is 2) and clamped: missing, unparseable
or zero values fall back to the configured defaults, page is at least 1
and limit is between 1 and the configured maximum.
"""

from __future__ import annotations

import re

from ..config import Settings

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(raw: str | None) -> int | None:
    """Parse the leading integer of raw, or None if there is none."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def resolve_page(page: str | None, limit: str | None, settings: Settings) -> tuple[int, int]:
    """Resolve raw page/limit query values to a valid (page, limit) pair."""
    page_no = parse_int(page) or settings.default_page
    page_size = parse_int(limit) or settings.default_limit
    return max(1, page_no), min(settings.max_limit, max(1, page_size))
