"""Explicit build inputs threaded through the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from .config import EngineConfig, load_config
from .store import MentionStore
from .types import AnalyticsRecord


@dataclass(frozen=True)
class BuildContext:
    """Everything a build reads besides the pages themselves.

    Built once per build and shared read-only by every transform; nothing in
    the engine consults settings or the environment directly.
    """

    config: EngineConfig = field(default_factory=load_config)
    production: bool = False
    mentions: MentionStore = field(default_factory=MentionStore)
    block_list: Tuple[str, ...] = ()
    analytics: Mapping[str, AnalyticsRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
