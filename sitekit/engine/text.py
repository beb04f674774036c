"""String filters used by the page templates."""

from __future__ import annotations

import html
import random
import re
from functools import lru_cache
from typing import Any, Callable, List, Optional, Sequence

from afinn import Afinn

NUMBER_WORDS = ("zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine")

# Words that never fit the column even though they are short enough.
LONG_WORDS = {"domcontentloaded", "getelementsbytagname"}
LONG_WORD_LENGTH = 11

ORPHAN_WRAP_MAX = 15
ORPHAN_DASH_JOIN = "\u200b—\u200b"

# Replies scoring below this read as hostile and get their case scrambled.
NEGATIVE_SENTIMENT = -0.07
RANDOM_CASE_MAX_LENGTH = 5000

TOKEN_SPLIT = re.compile(r"[^A-Za-z0-9_]+")

Escape = Callable[[str], str]


def leftpad(value: Any, length: int = 3) -> str:
    text = str(value)
    return ("0" * int(length) + text)[len(text):]


def truncate(value: str, length: int = 280, *, escape: Escape = html.escape) -> str:
    """Cut ``value`` to ``length`` characters, flagging the cut inline."""

    value = str(value)
    length = int(length)
    suffix = '… <span class="tag-inline">Truncated</span>' if len(value) > length else ""
    return escape(value[:length]) + suffix


def number_string(value: Any) -> Any:
    if isinstance(value, int) and 0 <= value < len(NUMBER_WORDS):
        return NUMBER_WORDS[value]
    return value


def render_number(value: Any) -> str:
    try:
        return f"{int(float(value)):,}"
    except (TypeError, ValueError, OverflowError):
        return str(value)


def round_number(value: Any, digits: int = 2) -> str:
    try:
        return f"{float(value):.{int(digits)}f}"
    except (TypeError, ValueError):
        return str(value)


def medialength_cleanup(value: str, *, escape: Escape = html.escape) -> str:
    minutes = escape(str(value).split(" ")[0])
    return f'{minutes}<span aria-hidden="true">m</span><span class="sr-only"> minutes</span>'


def word_count(content: str) -> str:
    words = len(content.split(" "))
    return f"{words} word{'s' if words != 1 else ''}"


def _wrap_long(word: str) -> str:
    if word.lower() in LONG_WORDS or len(word) >= LONG_WORD_LENGTH:
        return f'<span class="long-word">{word}</span>'
    return word


def long_word_wrap(value: Optional[str], *, escape: Escape = html.escape) -> Optional[str]:
    """Wrap long words so CSS can break them.

    Input that already looks like markup is only escaped, never wrapped.
    """

    if not value:
        return value
    opening = value.find("<")
    if opening > -1 and value.find(">") > opening:
        return escape(value)
    value = escape(value)

    def _split_join(text: str, separators: Sequence[str]) -> str:
        if not separators:
            return _wrap_long(text)
        head, rest = separators[0], separators[1:]
        return head.join(_split_join(part, rest) for part in text.split(head))

    return _split_join(value, (" ", "—", "(", ")"))


def orphan_wrap(value: str, *, escape: Escape = html.escape) -> str:
    """Keep the last two words of every dash-separated phrase together."""

    phrases = []
    for phrase in escape(str(value)).split("—"):
        words = phrase.split(" ")
        after = ""
        if len(words) > 1:
            if len(words) > 2:
                after += " "
            last = words.pop()
            second_last = words.pop()
            pair = f"{second_last} {last}"
            if len(pair) >= ORPHAN_WRAP_MAX:
                after += pair
            else:
                after += f'<span class="prevent-orphan">{pair}</span>'
        phrases.append(" ".join(words) + after)
    return ORPHAN_DASH_JOIN.join(phrases)


def emoji(content: str, *, escape: Escape = html.escape) -> str:
    return f'<span aria-hidden="true" class="emoji">{escape(str(content))}</span>'


def head(items: Sequence[Any], n: int) -> List[Any]:
    """First ``n`` items, or the last ``-n`` items when ``n`` is negative."""

    n = int(n)
    if n < 0:
        return list(items[n:])
    return list(items[:n])


def local_url(absolute_url: str, site_url: str) -> str:
    if not site_url:
        return absolute_url
    return absolute_url.replace(site_url.rstrip("/"), "")


def remove_newlines(value: str) -> str:
    return value.replace("\n", "")


def includes(items: Optional[Sequence[Any]], value: Any) -> bool:
    return value in (items or ())


def select_random(items: Sequence[Any], rng: Optional[random.Random] = None) -> Any:
    if not items:
        return None
    return (rng or random).choice(list(items))


@lru_cache(maxsize=1)
def _afinn() -> Afinn:
    return Afinn(language="en")


def sentiment_value(content: Optional[str], production: bool = False) -> float:
    """AFINN score of ``content`` averaged over its word tokens.

    Scoring only runs for production builds; local builds always get 0.
    """

    if not production or not content:
        return 0
    tokens = [token for token in TOKEN_SPLIT.split(content) if token]
    if not tokens:
        return 0
    return _afinn().score(" ".join(tokens)) / len(tokens)


def random_case(content: Optional[str], sentiment: float, rng: Optional[random.Random] = None) -> Optional[str]:
    if not content or len(content) > RANDOM_CASE_MAX_LENGTH or float(sentiment) >= NEGATIVE_SENTIMENT:
        return content
    chooser = rng or random
    return "".join(char.upper() if chooser.random() < 0.5 else char.lower() for char in content)
