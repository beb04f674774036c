"""Taxonomy labels derived from page tags and categories."""

from __future__ import annotations

from typing import FrozenSet, Iterator

from .config import EngineConfig, load_config
from .types import Page

_DEFAULT_CONFIG = load_config(None)


def is_post(page: Page, config: EngineConfig | None = None) -> bool:
    """Return True for pages whose source lives in the posts directory."""

    posts_dir = (config or _DEFAULT_CONFIG).posts_dir
    return f"/{posts_dir}/" in f"/{page.input_path.lstrip('./')}"


def is_speaking(page: Page) -> bool:
    return page.has_category("presentations") or page.has_tag("speaking")


def is_writing(page: Page, config: EngineConfig | None = None) -> bool:
    engine_config = config or _DEFAULT_CONFIG
    if not is_post(page, engine_config):
        return False
    partner_link = any(domain in page.external_url for domain in engine_config.partner_domains)
    if page.has_tag("external") and not page.has_tag("writing") and not partner_link:
        return False
    if page.has_tag("speaking") or page.has_tag("note"):
        return False
    return not page.has_category("presentations")


def is_web_fonts(page: Page) -> bool:
    return page.has_tag("font-loading") or page.has_category("font-loading")


def _labels(page: Page, config: EngineConfig) -> Iterator[str]:
    if is_speaking(page):
        yield "speaking"
    if is_writing(page, config):
        yield "writing"
    if is_web_fonts(page):
        yield "web-fonts"
    for tag in config.filter_tags:
        if page.has_tag(tag):
            yield tag


def classify(page: Page, config: EngineConfig | None = None) -> FrozenSet[str]:
    """Return every label that applies to ``page``; empty when none do."""

    return frozenset(_labels(page, config or _DEFAULT_CONFIG))


def filter_categories(page: Page, config: EngineConfig | None = None) -> str:
    """Labels joined by commas, in rule order, for client-side filtering."""

    return ",".join(_labels(page, config or _DEFAULT_CONFIG))
