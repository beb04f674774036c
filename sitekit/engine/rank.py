"""Popularity ranking of pages from analytics figures."""

from __future__ import annotations

from typing import List, Mapping, Sequence

from .types import RANK_METRICS, AnalyticsRecord, Page

DEFAULT_LIMIT = 20


def rank_by(
    pages: Sequence[Page],
    analytics: Mapping[str, AnalyticsRecord],
    metric: str,
    *,
    production: bool = False,
    limit: int = DEFAULT_LIMIT,
) -> List[Page]:
    """Return up to ``limit`` pages ordered by ``metric``, highest first.

    Pages without an analytics record (or without a value for the metric) are
    not ranked. Drafts are left out in production. Ties keep input order.
    """

    if metric not in RANK_METRICS:
        raise ValueError(f"Unknown ranking metric: {metric!r}")
    if not analytics:
        return []

    scored = []
    for page in pages:
        if production and page.is_draft:
            continue
        record = analytics.get(page.url)
        if record is None:
            continue
        value = record.metric(metric)
        if value is None:
            continue
        scored.append((value, page))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [page for _, page in scored[: max(limit, 0)]]
