"""Block list matching for webmention sources."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .types import Interaction


def is_blocked(source_url: str | None, block_list: Sequence[str]) -> bool:
    """Return True when ``source_url`` matches any block list entry.

    An entry matches when the source starts with it or contains it anywhere.
    The containment test also catches sources that only mention a blocked
    origin deep in their path. Sources without a URL are never blocked here.
    """

    if not source_url:
        return False
    for entry in block_list:
        if not entry:
            continue
        if source_url.startswith(entry) or entry in source_url:
            return True
    return False


def filter_blocked(interactions: Iterable[Interaction], block_list: Sequence[str]) -> List[Interaction]:
    """Drop interactions whose source is on the block list, keeping order."""

    return [item for item in interactions if not is_blocked(item.source_url, block_list)]
