"""Source lookup and scraper construction."""

from __future__ import annotations

from typing import Any, Callable, Dict

from scraping.errors import ConfigurationError
from scraping.fetchers.base import PageFetcher
from scraping.services.normalizer import KOREAN_NEWS_RULES, NormalizationRules
from scraping.settings import NewsSource, Settings, get_settings
from scraping.sources.base import SourceScraper
from scraping.sources.selector import SelectorScraper

ScraperFactory = Callable[[NewsSource], SourceScraper]

SOURCE_RULES: Dict[str, NormalizationRules] = {
    "chosun": KOREAN_NEWS_RULES,
    "hankyung": KOREAN_NEWS_RULES,
    "yonhap": KOREAN_NEWS_RULES,
}


def get_source(source_id: str, settings: Settings | None = None) -> NewsSource:
    config = settings or get_settings()
    key = source_id.strip().lower()
    for source in config.sources:
        if source.id == key:
            return source
    raise ConfigurationError(f"지원하지 않는 소스입니다: {source_id}")


def build_scraper(source: NewsSource, fetcher: PageFetcher[Any], settings: Settings | None = None) -> SourceScraper:
    config = settings or get_settings()
    return SelectorScraper(
        source,
        fetcher,
        rules=SOURCE_RULES.get(source.id, KOREAN_NEWS_RULES),
        min_content_length=config.min_content_length,
    )


def scraper_factory(fetcher: PageFetcher[Any], settings: Settings | None = None) -> ScraperFactory:
    config = settings or get_settings()

    def factory(source: NewsSource) -> SourceScraper:
        return build_scraper(source, fetcher, config)

    return factory
