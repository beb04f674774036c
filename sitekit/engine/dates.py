"""Timestamp parsing and date formatting helpers."""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Any, Optional, Sequence

from django.utils.dateparse import parse_date, parse_datetime

from ..exceptions import EmptyCollectionError

READABLE_DATE_FORMAT = "%B %d, %Y"
READABLE_DATETIME_FORMAT = "%d %b %Y at %I:%M%p"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Return an aware datetime for ``value`` or ``None`` when it is unusable.

    Accepts datetimes, dates, ISO-8601 strings (``Z``, ``+00:00`` or ``+0000``
    offsets, any fraction length) and numeric epoch seconds. Naive values are
    taken to be UTC.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            return None
        if parsed is None:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def readable_date(value: Any, fmt: str = READABLE_DATE_FORMAT) -> str:
    moment = parse_timestamp(value)
    return moment.strftime(fmt) if moment else ""


def readable_date_from_iso(value: str, fmt: str = READABLE_DATETIME_FORMAT) -> str:
    return readable_date(value, fmt)


def time_posted(start: Any, end: Any = None) -> str:
    """Describe how long ago ``start`` was, in days below a year and years above."""

    started = parse_timestamp(start)
    if started is None:
        return ""
    ended = parse_timestamp(end) if end is not None else datetime.now(timezone.utc)
    if ended is None:
        return ""

    num_days = (ended - started).total_seconds() / 86400
    days_posted = math.floor(num_days + 0.5)
    if days_posted < 365:
        return f"{days_posted} day{'s' if days_posted != 1 else ''}"

    years_posted = float(f"{num_days / 365:.1f}")
    return f"{years_posted:g} year{'s' if years_posted != 1 else ''}"


def rss_newest_updated_date(collection: Sequence[Any]) -> str:
    """Return the feed ``updated`` stamp from a newest-first page collection.

    An empty collection is a caller error: there is no sensible "newest"
    date, and guessing one would corrupt the feed metadata.
    """

    if not collection:
        raise EmptyCollectionError("Collection is empty in rss_newest_updated_date filter.")

    newest = parse_timestamp(getattr(collection[0], "date", None))
    if newest is None:
        raise EmptyCollectionError("Newest collection item has no date in rss_newest_updated_date filter.")
    return newest.replace(microsecond=0).isoformat()
