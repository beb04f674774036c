"""Collapsing repeated webmentions from the same source."""

from __future__ import annotations

from typing import Iterable, List

from .types import Interaction


def dedupe(interactions: Iterable[Interaction]) -> List[Interaction]:
    """Keep the first interaction seen for each source URL.

    Interactions without a source URL cannot be identified, so every one of
    them is kept.
    """

    seen: set[str] = set()
    unique: List[Interaction] = []
    for item in interactions:
        if item.source_url:
            if item.source_url in seen:
                continue
            seen.add(item.source_url)
        unique.append(item)
    return unique
