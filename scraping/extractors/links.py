"""Listing-page link discovery."""

from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from scraping.utils.logging import get_logger

logger = get_logger(__name__)


def extract_links(html: str, base_url: str, selector: str) -> List[str]:
    """Return absolute article URLs in document order without duplicates.

    A listing page that cannot be parsed yields an empty list.
    """
    if not html or not html.strip():
        return []
    try:
        soup = BeautifulSoup(html, "html.parser")
        anchors = soup.select(selector)
    except Exception as exc:
        logger.warning("links.parse_failed", extra={"base_url": base_url, "error": str(exc)})
        return []

    seen: set[str] = set()
    links: List[str] = []
    for a_tag in anchors:
        href = a_tag.get("href")
        if not href or not href.strip():
            continue
        full_url = urljoin(base_url, href.strip())
        if urlparse(full_url).scheme not in ("http", "https"):
            continue
        if full_url in seen:
            continue
        seen.add(full_url)
        links.append(full_url)
    return links
