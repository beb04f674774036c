"""Chronological ordering of webmentions."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from .types import Interaction


def sort_key(item: Interaction) -> datetime:
    return item.timestamp


def sort_oldest_first(interactions: Iterable[Interaction]) -> List[Interaction]:
    """Return interactions oldest first.

    Python's sort is stable, so interactions sharing a timestamp keep their
    input order and repeated builds render identically.
    """

    return sorted(interactions, key=sort_key)
