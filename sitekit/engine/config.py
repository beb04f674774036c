"""Configuration helpers for the build engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    @property
    def site_url(self) -> str:
        return str(self.raw.get("site_url", "")).rstrip("/")

    @property
    def posts_dir(self) -> str:
        return str(self.raw.get("posts_dir", "_posts")).strip("/")

    @property
    def popular_limit(self) -> int:
        return int(self.raw.get("popular_limit", 20))

    @property
    def latest_posts_limit(self) -> int:
        return int(self.raw.get("latest_posts_limit", 5))

    @property
    def partner_domains(self) -> Tuple[str, ...]:
        return tuple(self.raw.get("writing_partner_domains", ()))

    @property
    def filter_tags(self) -> Tuple[str, ...]:
        return tuple(self.raw.get("filter_tags", ()))


DEFAULTS: Dict[str, Any] = {
    "site_url": "https://www.example.com",
    "posts_dir": "_posts",
    "popular_limit": 20,
    "latest_posts_limit": 5,
    "first_post_year": 2007,
    "writing_partner_domains": ["filamentgroup.com"],
    "filter_tags": ["eleventy", "project", "note", "web-components"],
    "asset_version": "1.0.0",
    "indie_avatar_service": "https://v1.indieweb-avatar.11ty.dev",
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging it over the defaults."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
