"""Restricting webmentions to the interaction kinds a template asks for."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List

from .types import KNOWN_KINDS, Interaction


def parse_allowed_kinds(allowed: str | Iterable[str] | None = None) -> FrozenSet[str]:
    """Return the allowed kinds, limited to the known set.

    ``None`` (or an empty value) means every known kind. A string is read as a
    comma separated list such as ``"like-of,repost-of"``.
    """

    if not allowed:
        return frozenset(KNOWN_KINDS)
    if isinstance(allowed, str):
        requested = allowed.split(",")
    else:
        requested = list(allowed)
    return frozenset(kind.strip() for kind in requested if kind) & frozenset(KNOWN_KINDS)


def filter_by_kind(
    interactions: Iterable[Interaction],
    allowed_kinds: str | Iterable[str] | None = None,
) -> List[Interaction]:
    kinds = parse_allowed_kinds(allowed_kinds)
    return [item for item in interactions if item.kind in kinds]
