"""Sequential multi-source runs and single-source entry point."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable

from scraping.errors import ConfigurationError
from scraping.fetchers.base import PageFetcher
from scraping.models.domain import ScrapeRunSummary, ScrapingResult
from scraping.services.orchestrator import SleepFn, scrape_articles
from scraping.settings import NewsSource, Settings, get_settings
from scraping.sources.registry import ScraperFactory, build_scraper, get_source
from scraping.utils.logging import get_logger


async def scrape_all(
    sources: Iterable[NewsSource],
    factory: ScraperFactory,
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> ScrapeRunSummary:
    """Scrape every enabled source one after another.

    A source whose job raises is recorded as a failed result and the run
    moves on to the next source.
    """
    log = logger or get_logger(__name__)
    summary = ScrapeRunSummary()
    for source in sources:
        if not source.enabled:
            continue
        log.info("scrape_all.source_start", extra={"source": source.id})
        try:
            scraper = factory(source)
            result = await scrape_articles(scraper, settings=settings, logger=logger, sleep=sleep)
        except Exception as exc:
            log.error("scrape_all.source_failed", exc_info=True, extra={"source": source.id, "error": str(exc)})
            result = ScrapingResult(success=False, source=source.name, errors=[str(exc)])
        summary.results.append(result)
        log.info(
            "scrape_all.source_done",
            extra={"source": source.id, "success": result.success, "articles": result.total_count},
        )

    log.info(
        "scrape_all.complete",
        extra={
            "sources": len(summary.results),
            "successful_sources": summary.successful_sources,
            "total_articles": summary.total_articles,
        },
    )
    return summary


async def scrape_source(
    source_id: str,
    fetcher: PageFetcher[Any],
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> ScrapingResult:
    """Resolve ``source_id`` and run one job for it."""
    config = settings or get_settings()
    source = get_source(source_id, config)
    if not source.enabled:
        raise ConfigurationError(f"비활성화된 소스입니다: {source_id}")
    scraper = build_scraper(source, fetcher, config)
    return await scrape_articles(scraper, settings=config, logger=logger, sleep=sleep)
