"""Shared fixtures for engine tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable

import pytest

from sitekit.engine.config import load_config
from sitekit.engine.types import Interaction, Page

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def engine_config():
    """Provide a fresh copy of the default engine configuration."""

    return load_config(None)


def at(offset: float) -> datetime:
    """A timestamp ``offset`` seconds after a fixed base time."""

    return BASE_TIME + timedelta(seconds=offset)


def make_mention(
    source: str,
    *,
    kind: str = "like-of",
    target: str = "https://www.example.com/web/post/",
    received: float = 0,
    published: float | None = None,
) -> Interaction:
    return Interaction(
        kind=kind,
        source_url=source,
        target_url=target,
        received_at=at(received),
        published_at=at(published) if published is not None else None,
    )


def make_page(
    url: str,
    *,
    input_path: str = "./_posts/2024-01-01-post.md",
    date: datetime | None = BASE_TIME,
    tags: Iterable[str] | None = None,
    categories: Iterable[str] | None = None,
    permalink: str | None = "/web/post/",
    deprecated: bool = False,
    external_url: str = "",
    data: Dict[str, Any] | None = None,
) -> Page:
    return Page(
        url=url,
        input_path=input_path,
        date=date,
        tags=frozenset(tags or ()),
        categories=frozenset(categories or ()),
        permalink=permalink,
        deprecated=deprecated,
        external_url=external_url,
        data=data or {},
    )
