"""Typed data structures shared by the build engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from .dates import parse_timestamp

KNOWN_KINDS = ("mention-of", "in-reply-to", "like-of", "repost-of", "bookmark-of")

RANK_METRICS = ("rankPerDaysPosted", "rankTotal")


@dataclass(frozen=True)
class Interaction:
    """A single webmention received for one of the site's pages."""

    kind: str
    source_url: str
    target_url: str
    received_at: datetime
    published_at: Optional[datetime] = None
    data: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def timestamp(self) -> datetime:
        """Best available time: when it was published, else when it arrived."""

        return self.published_at or self.received_at


@dataclass(frozen=True)
class Page:
    """Content page metadata as produced by the content pipeline.

    Absent ``tags``/``categories`` are represented by empty sets so the
    membership helpers below never need presence checks.
    """

    url: str
    input_path: str = ""
    date: Optional[datetime] = None
    tags: FrozenSet[str] = frozenset()
    categories: FrozenSet[str] = frozenset()
    permalink: Optional[str] = None
    deprecated: bool = False
    external_url: str = ""
    data: Dict[str, Any] = field(default_factory=dict, compare=False)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def has_category(self, category: str) -> bool:
        return category in self.categories

    @property
    def is_draft(self) -> bool:
        return self.has_tag("draft")


@dataclass(frozen=True)
class AnalyticsRecord:
    """Popularity figures for one page URL."""

    rank_per_days_posted: Optional[float] = None
    rank_total: Optional[float] = None

    def metric(self, name: str) -> Optional[float]:
        if name == "rankPerDaysPosted":
            return self.rank_per_days_posted
        if name == "rankTotal":
            return self.rank_total
        raise ValueError(f"Unknown ranking metric: {name!r}")


def _string_set(value: Any) -> FrozenSet[str]:
    if not value:
        return frozenset()
    if isinstance(value, str):
        return frozenset([value])
    if isinstance(value, Iterable):
        return frozenset(str(item) for item in value if item)
    return frozenset()


def page_from_data(url: str, input_path: str, data: Mapping[str, Any] | None) -> Page:
    """Build a :class:`Page` from a loosely-typed front matter mapping."""

    data = dict(data or {})
    permalink = data.get("permalink")
    return Page(
        url=url,
        input_path=input_path,
        date=parse_timestamp(data.get("date")),
        tags=_string_set(data.get("tags")),
        categories=_string_set(data.get("categories")),
        permalink=str(permalink) if permalink else None,
        deprecated=bool(data.get("deprecated")),
        external_url=str(data.get("external_url") or ""),
        data=data,
    )


def analytics_from_data(entry: Mapping[str, Any]) -> AnalyticsRecord:
    """Build an :class:`AnalyticsRecord`, dropping non-numeric metrics."""

    def _number(key: str) -> Optional[float]:
        value = entry.get(key)
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    return AnalyticsRecord(
        rank_per_days_posted=_number("rankPerDaysPosted"),
        rank_total=_number("rankTotal"),
    )
