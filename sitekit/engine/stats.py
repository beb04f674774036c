"""Archive statistics for the writing and speaking pages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Sequence

from .types import Page


def _countable(page: Page, *, skip_deprecated: bool) -> bool:
    # Untagged pages always count, matching the feed collection.
    if not page.tags:
        return True
    if page.is_draft:
        return False
    return not (skip_deprecated and page.deprecated)


def post_count_for_year(posts: Iterable[Page], year: int | str) -> int:
    target = int(year)
    return sum(
        1
        for page in posts
        if _countable(page, skip_deprecated=False) and page.date and page.date.year == target
    )


def yearly_post_count(posts: Sequence[Page], start_year: int | str = 2007, end_year: int | None = None) -> str:
    """Comma separated post counts per year, ready for a sparkline URL."""

    last = end_year or datetime.now(timezone.utc).year
    counts = []
    for year in range(int(start_year), last + 1):
        counts.append(
            sum(
                1
                for page in posts
                if _countable(page, skip_deprecated=True) and page.date and page.date.year == year
            )
        )
    return ",".join(str(count) for count in counts)


def monthly_post_count(posts: Sequence[Page], year: int | str) -> str:
    target = int(year)
    counts = [0] * 12
    for page in posts:
        if not _countable(page, skip_deprecated=True) or not page.date:
            continue
        if page.date.year == target:
            counts[page.date.month - 1] += 1
    return ",".join(str(count) for count in counts)


def _speaking_meta(page: Page) -> Dict[str, Any]:
    metadata = page.data.get("metadata")
    if not isinstance(metadata, dict):
        return {}
    speaking = metadata.get("speaking")
    return speaking if isinstance(speaking, dict) else {}


def speaking_count(pages: Iterable[Page], prop: str, match: Optional[Any] = None) -> int:
    """Count pages whose speaking metadata sets ``prop`` (to ``match`` if given)."""

    total = 0
    for page in pages:
        value = _speaking_meta(page).get(prop)
        if value and (match is None or value == match):
            total += 1
    return total


def speaking_unique_count(pages: Iterable[Page], prop: str) -> int:
    values = set()
    for page in pages:
        value = _speaking_meta(page).get(prop)
        if value:
            values.add(value if isinstance(value, (str, int, float)) else str(value))
    return len(values)
