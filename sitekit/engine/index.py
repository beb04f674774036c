"""Coordinator for the webmention selection pipeline."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from . import blocklist as blocklist_module
from . import chrono as chrono_module
from . import dedupe as dedupe_module
from . import kinds as kinds_module
from .context import BuildContext
from .store import MentionStore
from .types import Interaction
from .urls import normalize_url


def webmentions_for_url(
    store: MentionStore,
    url: str | None,
    allowed_kinds: str | Iterable[str] | None = None,
    block_list: Sequence[str] = (),
) -> List[Interaction]:
    """Return the webmentions to display for ``url``, oldest first."""

    key = normalize_url(url)
    if not key:
        return []
    raw = store.mentions_for(key)
    if not raw:
        return []

    selected = kinds_module.filter_by_kind(raw, allowed_kinds)
    selected = blocklist_module.filter_blocked(selected, block_list)
    selected = [item for item in selected if normalize_url(item.target_url) == key]
    return chrono_module.sort_oldest_first(dedupe_module.dedupe(selected))


def webmentions_for_page(
    context: BuildContext,
    url: str | None,
    allowed_kinds: str | Iterable[str] | None = None,
) -> List[Interaction]:
    """Run :func:`webmentions_for_url` against the inputs of a build."""

    return webmentions_for_url(context.mentions, url, allowed_kinds, context.block_list)


def webmention_is_type(interaction: Interaction, kind: str) -> bool:
    return interaction.kind == kind
