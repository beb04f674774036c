"""Canonical URL keys used to group webmentions by target page."""

from __future__ import annotations

from urllib.parse import urlsplit

_DEFAULT_PORTS = {80, 443}


def normalize_url(url: str | None) -> str:
    """Return the canonical form of ``url`` used as a mention store key.

    Scheme and host are lower-cased, ``http`` folds into ``https``, default
    ports, credentials, the query string and the fragment are dropped, and
    trailing slashes are stripped from the path. Anything that does not parse
    as an absolute URL comes back unchanged so it simply fails to match.
    """

    if not url:
        return ""

    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
        port = parts.port
    except ValueError:
        return url

    if not parts.scheme or not host:
        return url

    scheme = parts.scheme.lower()
    if scheme == "http":
        scheme = "https"
    if ":" in host:
        host = f"[{host}]"
    netloc = host if port is None or port in _DEFAULT_PORTS else f"{host}:{port}"
    return f"{scheme}://{netloc}{parts.path.rstrip('/')}"
