"""Celery tasks for the scraping workflow."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict

from celery import shared_task

from scraping.fetchers.base import PageFetcher
from scraping.fetchers.http import HttpPageFetcher
from scraping.services.coordinator import scrape_all, scrape_source
from scraping.settings import Settings, get_settings
from scraping.sources.registry import scraper_factory
from scraping.utils.logging import get_logger

# Fetcher factory is kept pluggable for tests; it must return a PageFetcher.
FETCHER_FACTORY: Callable[[Settings], PageFetcher[Any]] | None = None


def _get_fetcher(settings: Settings) -> PageFetcher[Any]:
    if FETCHER_FACTORY is not None:
        return FETCHER_FACTORY(settings)
    return HttpPageFetcher(settings)


async def _close(fetcher: PageFetcher[Any]) -> None:
    aclose = getattr(fetcher, "aclose", None)
    if aclose is not None:
        await aclose()


async def _run_source(source_id: str, settings: Settings) -> Dict[str, Any]:
    fetcher = _get_fetcher(settings)
    try:
        result = await scrape_source(source_id, fetcher, settings=settings)
    finally:
        await _close(fetcher)
    return result.model_dump(mode="json")


async def _run_all(settings: Settings) -> Dict[str, Any]:
    fetcher = _get_fetcher(settings)
    try:
        summary = await scrape_all(settings.sources, scraper_factory(fetcher, settings), settings=settings)
    finally:
        await _close(fetcher)
    return summary.model_dump(mode="json")


def scrape_source_core(source_id: str) -> Dict[str, Any]:
    """Run one source job and return the JSON-ready result; test-friendly."""
    settings = get_settings()
    logger = get_logger(__name__)
    logger.info("task.scrape_source.start", extra={"source": source_id})
    payload = asyncio.run(_run_source(source_id, settings))
    logger.info(
        "task.scrape_source.done",
        extra={"source": source_id, "success": payload["success"], "articles": payload["total_count"]},
    )
    return payload


def scrape_all_core() -> Dict[str, Any]:
    settings = get_settings()
    payload = asyncio.run(_run_all(settings))
    get_logger(__name__).info(
        "task.scrape_all.done",
        extra={"successful_sources": payload["successful_sources"], "total_articles": payload["total_articles"]},
    )
    return payload


@shared_task(name="scraping.tasks.scrape.scrape_source")
def scrape_source_task(source_id: str) -> Dict[str, Any]:  # pragma: no cover - wrapper
    return scrape_source_core(source_id)


@shared_task(name="scraping.tasks.scrape.scrape_all")
def scrape_all_task() -> Dict[str, Any]:  # pragma: no cover - wrapper
    return scrape_all_core()
