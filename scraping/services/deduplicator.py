"""Empty-record filtering and title-based duplicate removal."""

from __future__ import annotations

import re
from typing import Iterable, List

from scraping.models.domain import Article

_WHITESPACE = re.compile(r"\s")


def title_key(title: str) -> str:
    return _WHITESPACE.sub("", title).casefold()


def is_duplicate_title(first: str, second: str) -> bool:
    """Titles are duplicates when one compacted title contains the other."""
    a, b = title_key(first), title_key(second)
    if not a or not b:
        return False
    return a in b or b in a


def filter_articles(candidates: Iterable[Article]) -> List[Article]:
    """Drop rejected candidates and near-duplicate titles.

    When two titles collide the earlier candidate (link order) is kept.
    """
    kept: List[Article] = []
    for article in candidates:
        if article.is_rejected:
            continue
        if any(is_duplicate_title(existing.title, article.title) for existing in kept):
            continue
        kept.append(article)
    return kept
