"""Named page collections consumed by the templates."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Sequence

from . import classify as classify_module
from . import rank as rank_module
from .config import EngineConfig
from .context import BuildContext
from .types import AnalyticsRecord, Page

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def sorted_by_date(pages: Sequence[Page]) -> List[Page]:
    """Oldest first, with the input path breaking ties."""

    return sorted(pages, key=lambda page: (page.date or _EPOCH, page.input_path))


def published(pages: Sequence[Page], production: bool) -> List[Page]:
    """Drop draft pages, but only for production builds."""

    if not production:
        return list(pages)
    return [page for page in pages if not page.is_draft]


def posts(pages: Sequence[Page], config: EngineConfig, production: bool = False) -> List[Page]:
    """Permalinked posts, newest first."""

    items = [
        page
        for page in sorted_by_date(pages)
        if classify_module.is_post(page, config) and page.permalink
    ]
    items.reverse()
    return published(items, production)


def feed_posts(pages: Sequence[Page], config: EngineConfig, production: bool = False) -> List[Page]:
    """Posts suitable for the syndication feed."""

    return [
        page
        for page in posts(pages, config, production)
        if not page.tags or not (page.deprecated or page.is_draft)
    ]


def writing(pages: Sequence[Page], config: EngineConfig, production: bool = False) -> List[Page]:
    newest_first = list(reversed(sorted_by_date(pages)))
    return [page for page in published(newest_first, production) if classify_module.is_writing(page, config)]


def latest_posts(pages: Sequence[Page], config: EngineConfig, production: bool = False) -> List[Page]:
    newest_first = list(reversed(sorted_by_date(pages)))
    items = [page for page in published(newest_first, production) if classify_module.is_post(page, config)]
    return items[: config.latest_posts_limit]


def font_loading(pages: Sequence[Page], production: bool = False) -> List[Page]:
    newest_first = list(reversed(sorted_by_date(pages)))
    return [page for page in published(newest_first, production) if classify_module.is_web_fonts(page)]


def presentations(pages: Sequence[Page], production: bool = False) -> List[Page]:
    newest_first = list(reversed(sorted_by_date(pages)))
    return [page for page in published(newest_first, production) if classify_module.is_speaking(page)]


def _markdown_posts(pages: Sequence[Page], config: EngineConfig) -> List[Page]:
    return [
        page
        for page in sorted_by_date(pages)
        if classify_module.is_post(page, config) and page.input_path.endswith(".md")
    ]


def popular_posts_ranked(
    pages: Sequence[Page],
    analytics: Mapping[str, AnalyticsRecord],
    config: EngineConfig,
    production: bool = False,
) -> List[Page]:
    return rank_module.rank_by(
        _markdown_posts(pages, config),
        analytics,
        "rankPerDaysPosted",
        production=production,
        limit=config.popular_limit,
    )


def popular_posts_total_ranked(
    pages: Sequence[Page],
    analytics: Mapping[str, AnalyticsRecord],
    config: EngineConfig,
    production: bool = False,
) -> List[Page]:
    return rank_module.rank_by(
        _markdown_posts(pages, config),
        analytics,
        "rankTotal",
        production=production,
        limit=config.popular_limit,
    )


def build_collections(pages: Sequence[Page], context: BuildContext) -> Dict[str, List[Page]]:
    """Return every named collection for one build."""

    config = context.config
    production = context.production
    return {
        "posts": posts(pages, config, production),
        "feedPosts": feed_posts(pages, config, production),
        "writing": writing(pages, config, production),
        "latestPosts": latest_posts(pages, config, production),
        "font-loading": font_loading(pages, production),
        "presentations": presentations(pages, production),
        "popularPostsRanked": popular_posts_ranked(pages, context.analytics, config, production),
        "popularPostsTotalRanked": popular_posts_total_ranked(pages, context.analytics, config, production),
    }
