"""Django template library exposing sitekit filters and tags.

Load it with ``{% load sitekit %}``. Pure filters come from
:mod:`sitekit.registry`; the tags below need the build context (the
mention store, block list, analytics and engine config) and read it
through :func:`sitekit.services.get_build_context`.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, List, Optional, Sequence

from django import template
from django.utils.html import conditional_escape
from django.utils.safestring import mark_safe

from ..engine import classify, index, markup, rank, stats, text
from ..engine.types import Interaction, Page
from ..registry import FILTERS
from ..services import get_build_context

logger = logging.getLogger(__name__)

register = template.Library()


def _safe_output(func: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(func)
    def wrapper(*args: Any) -> Any:
        result = func(*args)
        return mark_safe(result) if isinstance(result, str) else result

    return wrapper


def _escaped_output(func: Callable[..., Any]) -> Callable[..., Any]:
    # Untrusted input is escaped before the filter wraps it in markup.
    @functools.wraps(func)
    def wrapper(value: Any, *args: Any, autoescape: bool = True) -> Any:
        result = func(value, *args, escape=conditional_escape if autoescape else str)
        return mark_safe(result) if isinstance(result, str) else result

    return wrapper


for _entry in FILTERS.values():
    if _entry.autoescape:
        register.filter(_entry.name, _escaped_output(_entry.func), needs_autoescape=True)
    elif _entry.html:
        register.filter(_entry.name, _safe_output(_entry.func))
    else:
        register.filter(_entry.name, _entry.func)


@register.filter
def absolute_url(url: str, base: Optional[str] = None) -> str:
    site_url = base or get_build_context().config.site_url
    try:
        return markup.absolute_url(url, site_url)
    except ValueError:
        logger.warning("Could not convert %s to an absolute URL with base %s.", url, site_url)
        return url


@register.filter
def local_url(url: str) -> str:
    return text.local_url(url, get_build_context().config.site_url)


@register.filter
def filter_categories(page: Page) -> str:
    return classify.filter_categories(page, get_build_context().config)


@register.filter
def sentiment_value(content: Optional[str]) -> float:
    return text.sentiment_value(content, get_build_context().production)


@register.simple_tag
def webmentions_for_url(url: str, allowed_kinds: Optional[str] = None) -> List[Interaction]:
    """``{% webmentions_for_url page_url "like-of,repost-of" as likes %}``"""

    return index.webmentions_for_page(get_build_context(), url, allowed_kinds)


@register.simple_tag
def popular_posts(pages: Sequence[Page], metric: str = "rankPerDaysPosted") -> List[Page]:
    context = get_build_context()
    return rank.rank_by(
        pages,
        context.analytics,
        metric,
        production=context.production,
        limit=context.config.popular_limit,
    )


@register.simple_tag
def speaking_count(pages: Sequence[Page], prop: str, match: Any = None) -> int:
    return stats.speaking_count(pages, prop, match)


@register.simple_tag
def speaking_unique_count(pages: Sequence[Page], prop: str) -> int:
    return stats.speaking_unique_count(pages, prop)


@register.simple_tag
def youtube_embed(slug: str, start_time: Optional[str] = None, label: Optional[str] = None) -> str:
    version = str(get_build_context().config.get("asset_version", ""))
    return mark_safe(markup.youtube_embed_html(slug, version, start_time, label))


@register.simple_tag
def indie_avatar(url: str = "", classes: str = "z-avatar", onerror: str = "") -> str:
    service = str(get_build_context().config.get("indie_avatar_service", ""))
    return mark_safe(markup.indie_avatar_html(url, service, classes, onerror))


@register.simple_tag
def indie_avatar_bare(url: str = "", classes: str = "") -> str:
    service = str(get_build_context().config.get("indie_avatar_service", ""))
    return mark_safe(markup.indie_avatar_bare_html(url, service, classes))
