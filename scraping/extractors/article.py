"""Article-page field extraction."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from scraping.errors import ExtractionError
from scraping.models.domain import RawArticle
from scraping.settings import SourceSelectors

_KOREAN_DATETIME = re.compile(r"(\d{4})[.\-/]\s*(\d{1,2})[.\-/]\s*(\d{1,2})\.?(?:\s+(\d{1,2}):(\d{2}))?")


def _select_text(soup: BeautifulSoup, selector: Optional[str], separator: str = " ") -> Optional[str]:
    if not selector:
        return None
    node = soup.select_one(selector)
    if node is None:
        return None
    text = node.get_text(separator, strip=True)
    return text or None


def _meta(soup: BeautifulSoup, prop: str) -> Optional[str]:
    node = soup.find("meta", attrs={"property": prop}) or soup.find("meta", attrs={"name": prop})
    if isinstance(node, Tag):
        value = str(node.get("content") or "").strip()
        return value or None
    return None


def parse_published_at(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO-8601 or ``YYYY.MM.DD HH:MM`` timestamps; anything else is None."""
    if not value:
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    match = _KOREAN_DATETIME.search(text)
    if not match:
        return None
    year, month, day, hour, minute = match.groups()
    try:
        return datetime(int(year), int(month), int(day), int(hour or 0), int(minute or 0))
    except ValueError:
        return None


def _published_at(soup: BeautifulSoup, selector: Optional[str]) -> Optional[datetime]:
    if selector:
        node = soup.select_one(selector)
        if node is not None:
            attr = node.get("datetime")
            parsed = parse_published_at(str(attr) if attr else node.get_text(" ", strip=True))
            if parsed is not None:
                return parsed
    return parse_published_at(_meta(soup, "article:published_time"))


def _image_url(soup: BeautifulSoup, selector: Optional[str], url: str) -> Optional[str]:
    src: Optional[str] = None
    if selector:
        node = soup.select_one(selector)
        if node is not None:
            src = str(node.get("src") or node.get("data-src") or "").strip() or None
    src = src or _meta(soup, "og:image")
    return urljoin(url, src) if src else None


def extract_article(html: str, url: str, selectors: SourceSelectors) -> RawArticle:
    """Pull article fields out of a page; missing fields stay ``None``."""
    if not html or not html.strip():
        raise ExtractionError("빈 문서입니다.")
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as exc:
        raise ExtractionError(f"문서 파싱 실패: {exc}") from exc
    if soup.find() is None:
        raise ExtractionError("HTML 요소가 없는 문서입니다.")

    title = _select_text(soup, selectors.title) or _meta(soup, "og:title")
    if not title and soup.title is not None:
        title = soup.title.get_text(strip=True) or None

    return RawArticle(
        url=url,
        title=title,
        content=_select_text(soup, selectors.content, separator="\n"),
        author=_select_text(soup, selectors.author),
        published_at=_published_at(soup, selectors.published_at),
        category=_select_text(soup, selectors.category),
        image_url=_image_url(soup, selectors.image_url, url),
    )
