"""CSS-selector driven scraper shared by the configured news sites."""

from __future__ import annotations

from typing import Any, List

from scraping.extractors.article import extract_article
from scraping.extractors.links import extract_links
from scraping.fetchers.base import PageFetcher
from scraping.models.domain import Article, RawArticle
from scraping.services.normalizer import KOREAN_NEWS_RULES, NormalizationRules, normalize
from scraping.settings import NewsSource


class SelectorScraper:
    """Compose a page fetcher, the source's selectors and its normalization rules."""

    def __init__(
        self,
        source: NewsSource,
        fetcher: PageFetcher[Any],
        *,
        rules: NormalizationRules = KOREAN_NEWS_RULES,
        min_content_length: int = 100,
    ) -> None:
        self.source = source
        self._fetcher = fetcher
        self._rules = rules
        self._min_content_length = min_content_length

    async def acquire_session(self) -> Any:
        return await self._fetcher.acquire_session()

    async def load_page(self, session: Any, url: str) -> str:
        return await self._fetcher.load_page(session, url)

    async def release_session(self, session: Any) -> None:
        await self._fetcher.release_session(session)

    def extract_links(self, html: str) -> List[str]:
        return extract_links(html, self.source.list_page_url, self.source.selectors.article_links)

    def extract_article(self, html: str, url: str) -> RawArticle:
        return extract_article(html, url, self.source.selectors)

    def normalize(self, raw: RawArticle) -> Article:
        return normalize(raw, self._rules, min_content_length=self._min_content_length)
