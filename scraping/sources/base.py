"""Per-source scraper capability interface."""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable

from scraping.models.domain import Article, RawArticle
from scraping.settings import NewsSource


@runtime_checkable
class SourceScraper(Protocol):
    """Everything the job orchestrator needs from one news source."""

    source: NewsSource

    async def acquire_session(self) -> Any: ...

    async def load_page(self, session: Any, url: str) -> str: ...

    async def release_session(self, session: Any) -> None: ...

    def extract_links(self, html: str) -> List[str]: ...

    def extract_article(self, html: str, url: str) -> RawArticle: ...

    def normalize(self, raw: RawArticle) -> Article: ...
