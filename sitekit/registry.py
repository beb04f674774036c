"""Named registry of the template filters sitekit provides.

The registry only maps names to pure functions; the Django template
library in :mod:`sitekit.templatetags.sitekit` walks it to register them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict

from .engine import dates, index, markup, stats, text


@dataclass(frozen=True)
class TemplateFilter:
    """A filter function and how its output relates to markup.

    ``html`` filters return markup. ``autoescape`` filters build that markup
    around their input and take an ``escape`` keyword for it.
    """

    name: str
    func: Callable[..., Any]
    html: bool = False
    autoescape: bool = False


FILTERS: Dict[str, TemplateFilter] = {}


def register(name: str, func: Callable[..., Any], *, html: bool = False, autoescape: bool = False) -> None:
    if name in FILTERS:
        raise ValueError(f"Template filter {name!r} is already registered")
    FILTERS[name] = TemplateFilter(name=name, func=func, html=html or autoescape, autoescape=autoescape)


def get_filter(name: str) -> Callable[..., Any]:
    return FILTERS[name].func


register("leftpad", text.leftpad)
register("truncate", text.truncate, autoescape=True)
register("number_string", text.number_string)
register("render_number", text.render_number)
register("round", text.round_number)
register("medialength_cleanup", text.medialength_cleanup, autoescape=True)
register("word_count", text.word_count)
register("long_word_wrap", text.long_word_wrap, autoescape=True)
register("orphan_wrap", text.orphan_wrap, autoescape=True)
register("emoji", text.emoji, autoescape=True)
register("head", text.head)
register("remove_newlines", text.remove_newlines)
register("includes", text.includes)
register("select_random", text.select_random)
register("random_case", text.random_case)

register("readable_date", dates.readable_date)
register("readable_date_from_iso", dates.readable_date_from_iso)
register("time_posted", dates.time_posted)
register("rss_newest_updated_date", dates.rss_newest_updated_date)

register("sanitize_html", markup.sanitize_html, html=True)
register("html_entities", markup.html_entities, html=True)
register("encode_uri_component", markup.encode_uri_component)
register("hostname_from_url", markup.hostname_from_url)
register("twitter_username_from_url", markup.twitter_username_from_url)

register("post_count_for_year", stats.post_count_for_year)
register("yearly_post_count", stats.yearly_post_count)
register("monthly_post_count", stats.monthly_post_count)

register("webmention_is_type", index.webmention_is_type)
