from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Annotated, Any
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from scraping.errors import ConfigurationError
from scraping.fetchers.base import PageFetcher
from scraping.fetchers.http import HttpPageFetcher
from scraping.services.coordinator import scrape_all, scrape_source
from scraping.settings import Settings, get_settings
from scraping.sources.registry import scraper_factory
from scraping.utils.logging import get_logger

from .models import (
    ApiResponse,
    ArticleValidation,
    ArticleValidationRequest,
    ServiceStatus,
    SupportedSource,
)

SERVICE_NAME = "news-scraping-service"
SERVICE_VERSION = "1.0.0"

router = APIRouter(prefix="/api")
logger = get_logger("scraping.api")

_STARTED_AT = time.monotonic()


def settings_dependency() -> Settings:
    return get_settings()


def fetcher_dependency(request: Request) -> PageFetcher[Any]:
    fetcher = getattr(request.app.state, "fetcher", None)
    if fetcher is None:
        fetcher = HttpPageFetcher(get_settings())
        request.app.state.fetcher = fetcher
    return fetcher


SettingsDep = Annotated[Settings, Depends(settings_dependency)]
FetcherDep = Annotated[PageFetcher[Any], Depends(fetcher_dependency)]


def _envelope(response: ApiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json", exclude_none=True))


@router.get("/health")
async def health_route() -> JSONResponse:
    return _envelope(ApiResponse(success=True, message="스크래핑 서비스가 정상 동작 중입니다"))


@router.get("/status")
async def status_route(settings: SettingsDep) -> JSONResponse:
    status = ServiceStatus(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 1),
        timestamp=datetime.now(timezone.utc),
        supported_sources=[
            SupportedSource(id=source.id, name=source.name, enabled=source.enabled) for source in settings.sources
        ],
    )
    return _envelope(ApiResponse(success=True, data=status.model_dump(mode="json")))


@router.post("/scrape/{source_id}")
async def scrape_source_route(source_id: str, settings: SettingsDep, fetcher: FetcherDep) -> JSONResponse:
    logger.info("api.scrape", extra={"source": source_id})
    try:
        result = await scrape_source(source_id, fetcher, settings=settings)
    except ConfigurationError as exc:
        return _envelope(ApiResponse(success=False, error=str(exc)), status_code=400)
    except Exception as exc:
        logger.exception("api.scrape_failed", extra={"source": source_id})
        return _envelope(ApiResponse(success=False, error=f"스크래핑 실행 중 오류: {exc}"), status_code=500)

    message = (
        f"{result.total_count}개 기사를 성공적으로 스크래핑했습니다"
        if result.success
        else "스크래핑 중 오류가 발생했습니다"
    )
    return _envelope(
        ApiResponse(success=result.success, data=result.model_dump(mode="json"), message=message),
        status_code=200 if result.success else 500,
    )


@router.post("/scrape-all")
async def scrape_all_route(settings: SettingsDep, fetcher: FetcherDep) -> JSONResponse:
    logger.info("api.scrape_all")
    try:
        summary = await scrape_all(settings.sources, scraper_factory(fetcher, settings), settings=settings)
    except Exception as exc:
        logger.exception("api.scrape_all_failed")
        return _envelope(ApiResponse(success=False, error=f"전체 스크래핑 실행 중 오류: {exc}"), status_code=500)

    return _envelope(
        ApiResponse(
            success=summary.success,
            data=[result.model_dump(mode="json") for result in summary.results],
            message=f"{summary.successful_sources}개 소스에서 총 {summary.total_articles}개 기사를 스크래핑했습니다",
        )
    )


def validate_article(title: str, content: str, url: str) -> ArticleValidation:
    validation = ArticleValidation()
    if len(title) < 10:
        validation.is_valid = False
        validation.issues.append("제목이 너무 짧습니다")
        validation.score -= 20
    if len(content) < 100:
        validation.is_valid = False
        validation.issues.append("본문이 너무 짧습니다")
        validation.score -= 30
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        validation.is_valid = False
        validation.issues.append("유효하지 않은 URL입니다")
        validation.score -= 10
    return validation


@router.post("/validate-article")
async def validate_article_route(payload: ArticleValidationRequest) -> JSONResponse:
    if not payload.title or not payload.content or not payload.url:
        return _envelope(
            ApiResponse(success=False, error="필수 필드가 누락되었습니다 (title, content, url)"),
            status_code=400,
        )
    validation = validate_article(payload.title, payload.content, payload.url)
    return _envelope(ApiResponse(success=True, data=validation.model_dump()))
