"""HTML and URL helpers for rendering webmentions and embeds."""

from __future__ import annotations

import html
from typing import Dict, Optional, Tuple
from urllib.parse import quote, urljoin, urlsplit

from bs4 import BeautifulSoup

# Tags kept by sanitize_html, with the attributes each may carry.
ALLOWED_TAGS: Dict[str, Tuple[str, ...]] = {
    "b": (),
    "i": (),
    "em": (),
    "strong": (),
    "a": ("href",),
}

# Tags removed together with everything inside them.
DISCARD_TAGS = ["script", "style", "textarea", "option", "noscript"]

ALLOWED_SCHEMES = {"http", "https", "ftp", "mailto", "tel"}

TWITTER_PREFIX = "https://twitter.com/"


def _safe_href(value: str) -> bool:
    scheme = urlsplit(value.strip()).scheme.lower()
    return not scheme or scheme in ALLOWED_SCHEMES


def sanitize_html(content: Optional[str]) -> str:
    """Reduce third-party HTML (webmention content) to a few inline tags.

    Disallowed tags are unwrapped so their text survives; script-like tags
    are removed with their contents. Links keep only an ``href`` with a safe
    scheme.
    """

    if not content:
        return ""

    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(DISCARD_TAGS):
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        allowed = ALLOWED_TAGS.get(tag.name)
        if allowed is None:
            tag.unwrap()
            continue
        tag.attrs = {name: value for name, value in tag.attrs.items() if name in allowed}
        href = tag.attrs.get("href")
        if href is not None and not _safe_href(str(href)):
            del tag.attrs["href"]

    return str(soup)


def html_entities(value: str) -> str:
    return html.escape(value, quote=True)


def encode_uri_component(value: str) -> str:
    return quote(str(value), safe="-_.!~*'()")


def absolute_url(url: str, base: str) -> str:
    """Resolve ``url`` against ``base``; raises ``ValueError`` if it cannot."""

    return urljoin(base, url)


def hostname_from_url(url: str) -> str:
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def twitter_username_from_url(url: Optional[str]) -> Optional[str]:
    if url and TWITTER_PREFIX in url:
        return "@" + url.replace(TWITTER_PREFIX, "")
    return None


def origin_of(url: str) -> str:
    """Scheme and host of ``url``; the input itself when it has neither."""

    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url
    return f"{parts.scheme}://{parts.netloc}"


def indie_avatar_html(
    url: str,
    service: str,
    classes: str = "z-avatar",
    onerror: str = "",
) -> str:
    src = f"{service.rstrip('/')}/{encode_uri_component(url)}/"
    onerror_attr = f' onerror="{html.escape(onerror)}"' if onerror else ""
    return (
        f'<img alt="IndieWeb Avatar for {html.escape(url)}" class="{html.escape(classes)}" '
        f'loading="lazy" decoding="async" src="{html.escape(src)}" width="60" height="60"{onerror_attr}>'
    )


def indie_avatar_bare_html(url: str, service: str, classes: str = "") -> str:
    return indie_avatar_html(
        origin_of(url),
        service,
        classes,
        "this.parentNode.classList.add('error')",
    )


def youtube_embed_html(
    slug: str,
    asset_version: str,
    start_time: Optional[str] = None,
    label: Optional[str] = None,
) -> str:
    slug = html.escape(slug)
    params = f' params="start={html.escape(str(start_time))}"' if start_time else ""
    suffix = f": {html.escape(label)}" if label else ""
    return (
        f'<div class="fullwidth"><is-land on:visible import="/web/dist/{html.escape(asset_version)}/lite-yt-embed.js" '
        f'class="fluid-width-video-wrapper"><lite-youtube videoid="{slug}"{params} playlabel="Play{suffix}" '
        f"style=\"background-image:url('https://i.ytimg.com/vi/{slug}/maxresdefault.jpg')\">\n"
        f'\t<a href="https://youtube.com/watch?v={slug}" class="lty-playbtn" title="Play Video">'
        f'<span class="lyt-visually-hidden">Play Video{suffix}</span></a>\n'
        f"</lite-youtube></is-land></div>"
    )
