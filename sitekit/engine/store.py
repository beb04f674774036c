"""Read-only webmention store keyed by normalized target URL."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .dates import parse_timestamp
from .types import Interaction
from .urls import normalize_url


@dataclass(frozen=True)
class MentionStore:
    """Interactions grouped by the normalized URL they were sent to."""

    mentions: Mapping[str, Tuple[Interaction, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def mentions_for(self, url: str | None) -> Tuple[Interaction, ...]:
        return self.mentions.get(normalize_url(url), ())

    def __len__(self) -> int:
        return sum(len(items) for items in self.mentions.values())


def interaction_from_record(record: Mapping[str, Any]) -> Interaction:
    """Convert a webmention.io style record into an :class:`Interaction`.

    Raises ``ValueError`` when the record has no usable received time.
    """

    if not isinstance(record, Mapping):
        raise ValueError(f"Webmention record must be a mapping, got {type(record).__name__}")

    received = parse_timestamp(record.get("wm-received"))
    if received is None:
        raise ValueError(f"Webmention record {record.get('wm-id')!r} has no valid wm-received")

    return Interaction(
        kind=str(record.get("wm-property") or ""),
        source_url=str(record.get("url") or ""),
        target_url=str(record.get("wm-target") or ""),
        received_at=received,
        published_at=parse_timestamp(record.get("published")),
        data=dict(record),
    )


def build_mention_store(grouped: Mapping[str, Iterable[Interaction]]) -> MentionStore:
    """Freeze ``grouped`` into a store, merging keys that normalize alike."""

    merged: Dict[str, List[Interaction]] = {}
    for url, items in grouped.items():
        merged.setdefault(normalize_url(url), []).extend(items)
    return MentionStore(MappingProxyType({key: tuple(items) for key, items in merged.items()}))
