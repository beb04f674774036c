"""Loading build inputs from disk and exposing them to the templates.

These functions sit at the edge of the engine: they read data files,
front matter and Django settings, log what they find, and hand frozen
values to the pure transforms in :mod:`sitekit.engine`. Nothing under
``sitekit.engine`` reads files, settings or the environment itself.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

import yaml
from django.conf import settings

from .engine.config import load_config
from .engine.context import BuildContext
from .engine.store import MentionStore, build_mention_store, interaction_from_record
from .engine.types import AnalyticsRecord, Interaction, Page, analytics_from_data, page_from_data
from .exceptions import DataFileError

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


def load_json(path: str | Path, default: Any) -> Any:
    """Return the decoded JSON at ``path``, or ``default`` when it is missing.

    A file that exists but does not decode is a configuration fault and
    raises :class:`~sitekit.exceptions.DataFileError`.
    """

    file_path = Path(path)
    if not file_path.exists():
        logger.info("Data file %s not found; using an empty dataset.", file_path)
        return default
    try:
        with file_path.open("r", encoding="utf-8") as stream:
            return json.load(stream)
    except (OSError, ValueError) as exc:
        raise DataFileError(f"Could not read data file {file_path}: {exc}") from exc


def mention_store_from_payload(payload: Mapping[str, Any]) -> MentionStore:
    """Build a store from the ``{"mentions": {url: [record, ...]}}`` payload.

    Records without a usable received time are skipped with a warning.
    """

    mentions = payload.get("mentions") if isinstance(payload, Mapping) else None
    if not isinstance(mentions, Mapping):
        return MentionStore()

    grouped: Dict[str, List[Interaction]] = {}
    skipped = 0
    for url, records in mentions.items():
        if not isinstance(records, list):
            skipped += 1
            logger.warning(
                "Skipping webmentions for %s: expected a list, got %s", url, type(records).__name__
            )
            continue
        items = grouped.setdefault(url, [])
        for record in records:
            try:
                items.append(interaction_from_record(record))
            except ValueError as exc:
                skipped += 1
                logger.warning("Skipping webmention for %s: %s", url, exc)

    store = build_mention_store(grouped)
    logger.info(
        "Loaded %d webmentions for %d targets (%d skipped).",
        len(store),
        len(store.mentions),
        skipped,
    )
    return store


def load_mention_store(path: str | Path) -> MentionStore:
    return mention_store_from_payload(load_json(path, {}))


def load_block_list(path: str | Path) -> Tuple[str, ...]:
    entries = load_json(path, [])
    if not isinstance(entries, list):
        raise DataFileError(f"Block list {path} must be a JSON array")
    block_list = tuple(str(entry).strip() for entry in entries if entry and str(entry).strip())
    logger.info("Loaded %d block list entries.", len(block_list))
    return block_list


def load_analytics(path: str | Path) -> Mapping[str, AnalyticsRecord]:
    payload = load_json(path, {})
    if not isinstance(payload, Mapping):
        raise DataFileError(f"Analytics data {path} must be a JSON object")
    records = {
        url: analytics_from_data(entry)
        for url, entry in payload.items()
        if isinstance(entry, Mapping)
    }
    logger.info("Loaded analytics for %d pages.", len(records))
    return MappingProxyType(records)


def split_front_matter(source: str) -> Tuple[Dict[str, Any], str]:
    """Split a Markdown document into its YAML front matter and body."""

    lines = source.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}, source
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            data = yaml.safe_load("".join(lines[1:index])) or {}
            if not isinstance(data, dict):
                raise DataFileError("Front matter must be a YAML mapping")
            return data, "".join(lines[index + 1:])
    return {}, source


def load_page(path: str | Path, url: str) -> Page:
    """Read a content file and build its :class:`Page` from the front matter."""

    file_path = Path(path)
    try:
        data, _ = split_front_matter(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise DataFileError(f"Invalid front matter in {file_path}: {exc}") from exc
    return page_from_data(url, file_path.as_posix(), data)


def build_context_from_settings() -> BuildContext:
    """Assemble a :class:`BuildContext` from the ``SITEKIT_*`` settings."""

    data_dir = Path(getattr(settings, "SITEKIT_DATA_DIR", "_data"))
    production = bool(getattr(settings, "SITEKIT_PRODUCTION", False))
    context = BuildContext(
        config=load_config(getattr(settings, "SITEKIT_ENGINE_CONFIG", None)),
        production=production,
        mentions=load_mention_store(data_dir / "webmentions.json"),
        block_list=load_block_list(data_dir / "webmentionsBlockList.json"),
        analytics=load_analytics(data_dir / "analytics.json"),
    )
    logger.info("Build context ready (production=%s).", production)
    return context


@lru_cache(maxsize=1)
def get_build_context() -> BuildContext:
    """Return the build context for this process, loading it on first use."""

    return build_context_from_settings()


def reset_build_context(**kwargs: Any) -> None:
    get_build_context.cache_clear()
