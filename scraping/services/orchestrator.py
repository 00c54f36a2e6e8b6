"""Single-source scraping job: listing -> links -> articles -> filtered result."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List

from scraping.errors import ListingFetchError
from scraping.fetchers.base import session_scope
from scraping.models.domain import Article, Job, ScrapingResult, ScrapingStatus
from scraping.services.deduplicator import filter_articles
from scraping.settings import Settings, get_settings
from scraping.sources.base import SourceScraper
from scraping.utils.logging import JobLoggerAdapter, job_logger

SleepFn = Callable[[float], Awaitable[None]]

LOAD_FAILED = "기사 로드 실패"
EXTRACT_FAILED = "기사 추출 실패"
SCRAPE_FAILED = "기사 스크래핑 실패"


async def _scrape_link(
    scraper: SourceScraper,
    session: Any,
    link: str,
    result: ScrapingResult,
    candidates: List[Article],
    log: JobLoggerAdapter,
) -> None:
    stage = LOAD_FAILED
    try:
        html = await scraper.load_page(session, link)
        stage = EXTRACT_FAILED
        raw = scraper.extract_article(html, link)
        stage = SCRAPE_FAILED
        article = scraper.normalize(raw)
    except Exception as exc:
        message = f"{stage}: {link} - {exc}"
        result.errors.append(message)
        log.warning("scrape.link_failed", extra={"url": link, "stage": stage, "error": str(exc)})
        return

    if article.is_rejected:
        result.rejected_urls.append(link)
        log.debug("scrape.link_rejected", extra={"url": link})
        return
    candidates.append(article)
    log.debug("scrape.link_done", extra={"url": link, "title": article.title, "quality_score": article.quality_score})


async def scrape_articles(
    scraper: SourceScraper,
    *,
    settings: Settings | None = None,
    logger: logging.Logger | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> ScrapingResult:
    """Run one scraping job for ``scraper.source``.

    Per-link failures are recorded in ``errors`` and never fail the job; a
    session or listing failure yields ``success=False`` with one error.
    """
    config = settings or get_settings()
    job = Job(source=scraper.source)
    log = job_logger(job.job_id, scraper.source.name, logger)
    result = ScrapingResult(source=scraper.source.name, scraped_at=job.started_at, job_id=job.job_id)

    job.status = ScrapingStatus.RUNNING
    log.info("scrape.start", extra={"status": job.status.value})
    candidates: List[Article] = []
    try:
        async with session_scope(scraper) as session:
            try:
                listing_html = await scraper.load_page(session, scraper.source.list_page_url)
            except Exception as exc:
                raise ListingFetchError(f"목록 페이지 로드 실패: {exc}") from exc

            links = scraper.extract_links(listing_html)
            log.info("scrape.links", extra={"links": len(links), "max_links": config.max_links_per_job})

            for link in links[: config.max_links_per_job]:
                await sleep(config.delay_seconds)
                await _scrape_link(scraper, session, link, result, candidates, log)
        articles = filter_articles(candidates)
    except Exception as exc:
        job.status = ScrapingStatus.FAILED
        result.success = False
        result.articles = []
        result.errors.append(f"스크래핑 실패: {exc}")
        log.error("scrape.failed", exc_info=True, extra={"status": job.status.value, "error": str(exc)})
        return result

    job.status = ScrapingStatus.COMPLETED
    result.success = True
    result.articles = articles
    log.info(
        "scrape.complete",
        extra={
            "status": job.status.value,
            "articles": result.total_count,
            "errors": len(result.errors),
            "rejected": len(result.rejected_urls),
            "duplicates": len(candidates) - len(articles),
        },
    )
    return result
