from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from dotenv import load_dotenv

# 프로젝트 루트의 .env 파일 명시적 로딩
project_root = Path(__file__).parent.parent
env_path = project_root / ".env"

if env_path.exists():
    load_dotenv(env_path)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scraping.fetchers.http import HttpPageFetcher
from scraping.settings import get_settings
from scraping.utils.logging import configure_logging, get_logger

from .models import ApiResponse
from .routes import SERVICE_NAME, SERVICE_VERSION, _envelope, router

logger = get_logger("scraping.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.log_level, json_enabled=settings.log_json)
    fetcher = HttpPageFetcher(settings)
    app.state.fetcher = fetcher
    logger.info("api.startup", extra={"sources": [source.id for source in settings.enabled_sources()]})
    try:
        yield
    finally:
        # release any fetch session still held by an interrupted job
        await fetcher.aclose()
        logger.info("api.shutdown")


app = FastAPI(title="News Scraping Service", version=SERVICE_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        error = "요청한 엔드포인트를 찾을 수 없습니다"
    else:
        error = str(exc.detail)
    return _envelope(ApiResponse(success=False, error=error, path=request.url.path), status_code=exc.status_code)


@app.get("/", tags=["system"])
async def index() -> dict[str, object]:
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "endpoints": {
            "health": "/api/health",
            "status": "/api/status",
            "scrape": "/api/scrape/{source_id}",
            "scrape_all": "/api/scrape-all",
            "validate_article": "/api/validate-article",
        },
    }


@app.get("/healthz", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
