"""Configuration models for the scraping service."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, List, Optional, Set

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class SourceSelectors(BaseModel):
    """CSS selectors used to pull fields out of a source's pages."""

    model_config = ConfigDict(frozen=True)

    article_links: str = Field(..., description="목록 페이지의 기사 링크 셀렉터.")
    title: str
    content: str
    author: Optional[str] = None
    published_at: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class NewsSource(BaseModel):
    """A news site the pipeline can scrape."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="소스 식별자 (예: chosun).")
    name: str = Field(..., description="표시용 이름.")
    base_url: str
    list_page_url: str = Field(..., description="기사 목록 페이지 URL.")
    selectors: SourceSelectors
    enabled: bool = Field(True, description="스크래핑 사용 여부.")
    scrape_interval_minutes: PositiveInt = Field(60, description="정기 스크래핑 주기 (분 단위).")

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        source_id = value.strip().lower()
        if not source_id:
            raise ValueError("source id는 공백일 수 없습니다.")
        return source_id

    @field_validator("base_url", "list_page_url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        url = value.strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"유효한 http(s) URL이어야 합니다: {value}")
        return url


def _default_sources() -> List[NewsSource]:
    return [
        NewsSource(
            id="chosun",
            name="조선일보",
            base_url="https://www.chosun.com",
            list_page_url="https://www.chosun.com/national/",
            selectors=SourceSelectors(
                article_links='a[href*="/national/"]',
                title=".article-header h1, .news-title h1",
                content=".article-body, .news-content",
                author=".reporter-name, .byline",
                published_at=".date-time, .news-date",
                category=".category, .section-name",
                image_url=".article-photo img, .news-photo img",
            ),
            enabled=True,
            scrape_interval_minutes=60,
        ),
        NewsSource(
            id="hankyung",
            name="한국경제",
            base_url="https://www.hankyung.com",
            list_page_url="https://www.hankyung.com/economy",
            selectors=SourceSelectors(
                article_links='a[href*="/article/"]',
                title=".headline, .news-tit",
                content=".article-body, .news-body",
                author=".journalist, .reporter",
                published_at=".date, .news-date",
                category=".category",
                image_url=".photo img, .article-img img",
            ),
            enabled=True,
            scrape_interval_minutes=60,
        ),
        NewsSource(
            id="yonhap",
            name="연합뉴스",
            base_url="https://www.yna.co.kr",
            list_page_url="https://www.yna.co.kr/economy",
            selectors=SourceSelectors(
                article_links='a[href*="/view/"]',
                title=".tit, .article-tit",
                content=".story-news, .article-txt",
                author=".writer, .byline",
                published_at=".date, .article-date",
                category=".category",
                image_url=".img-wrap img, .photo img",
            ),
            enabled=True,
            scrape_interval_minutes=45,
        ),
    ]


class Settings(BaseSettings):
    """스크래핑 서비스 환경 설정."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    redis_url: str = Field(
        "redis://localhost:6379/0",
        alias="SCRAPING_REDIS_URL",
        description="Celery 브로커/백엔드 Redis DSN.",
    )
    sources: List[NewsSource] = Field(
        default_factory=_default_sources,
        alias="SCRAPING_SOURCES",
        description="JSON 배열 형태의 뉴스 소스 목록.",
    )
    max_links_per_job: PositiveInt = Field(20, alias="MAX_LINKS_PER_JOB", description="작업당 최대 기사 링크 수.")
    delay_between_requests_ms: NonNegativeInt = Field(
        1000,
        alias="DELAY_BETWEEN_REQUESTS",
        description="기사 요청 사이 지연 (밀리초).",
    )
    min_content_length: NonNegativeInt = Field(100, alias="MIN_CONTENT_LENGTH", description="본문 최소 길이.")
    scraping_timeout_ms: PositiveInt = Field(30_000, alias="SCRAPING_TIMEOUT", description="페이지 로드 타임아웃 (밀리초).")
    retry_attempts: PositiveInt = Field(3, alias="RETRY_ATTEMPTS", description="페이지 로드 최대 시도 횟수.")
    user_agent: str = Field(DEFAULT_USER_AGENT, alias="SCRAPING_USER_AGENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL", description="로그 레벨.")
    log_json: bool = Field(False, alias="LOG_JSON", description="로그를 JSON 형식으로 출력할지 여부.")
    health_check_interval_minutes: PositiveInt = Field(
        60,
        alias="HEALTH_CHECK_INTERVAL_MINUTES",
        description="헬스 체크 주기 (분 단위).",
    )

    @field_validator("sources", mode="before")
    @classmethod
    def _parse_sources(cls, value: Any) -> List[Any]:
        if value in (None, "", []):
            return []
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("SCRAPING_SOURCES는 JSON 배열이어야 합니다.") from exc
            return parsed
        if isinstance(value, list):
            return value
        raise ValueError("SCRAPING_SOURCES는 리스트 형태여야 합니다.")

    @field_validator("sources")
    @classmethod
    def _validate_unique_sources(cls, value: List[NewsSource]) -> List[NewsSource]:
        seen: Set[str] = set()
        for source in value:
            if source.id in seen:
                raise ValueError(f"중복된 소스 항목이 존재합니다: {source.id}")
            seen.add(source.id)
        return value

    @property
    def delay_seconds(self) -> float:
        return self.delay_between_requests_ms / 1000

    @property
    def timeout_seconds(self) -> float:
        return self.scraping_timeout_ms / 1000

    def enabled_sources(self) -> List[NewsSource]:
        return [source for source in self.sources if source.enabled]


@lru_cache()
def get_settings() -> Settings:
    """환경 변수를 기준으로 Settings 인스턴스를 반환한다."""
    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"환경 변수 검증에 실패했습니다: {exc}") from exc


def reset_settings_cache() -> None:
    """Settings LRU 캐시를 초기화한다 (테스트 용도)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
