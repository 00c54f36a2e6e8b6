"""Domain models for the scraping pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from scraping.settings import NewsSource


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScrapingStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class RawArticle(BaseModel):
    """Unvalidated fields pulled straight out of an article page."""

    url: str
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    published_at: Optional[datetime] = None
    category: Optional[str] = None
    image_url: Optional[str] = None


class Article(BaseModel):
    """Normalized article; empty title and content mark a rejected candidate."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    url: str
    title: str = ""
    content: str = ""
    author: Optional[str] = None
    published_at: Optional[datetime] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list, max_length=5)
    quality_score: int = Field(0, ge=0, le=100, description="완성도 점수 (랭킹 참고용)")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_rejected(self) -> bool:
        return not self.title or not self.content


class ScrapingResult(BaseModel):
    """Outcome of one scraping job."""

    success: bool = False
    articles: List[Article] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    source: str
    scraped_at: datetime = Field(default_factory=_utcnow)
    job_id: Optional[str] = None
    rejected_urls: List[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_count(self) -> int:
        return len(self.articles)


class ScrapeRunSummary(BaseModel):
    """Aggregate of a sequential multi-source run."""

    results: List[ScrapingResult] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def successful_sources(self) -> int:
        return sum(1 for result in self.results if result.success)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_articles(self) -> int:
        return sum(result.total_count for result in self.results)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        return self.successful_sources > 0


@dataclass
class Job:
    """Ephemeral context of one orchestration run."""

    source: NewsSource
    job_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = field(default_factory=_utcnow)
    status: ScrapingStatus = ScrapingStatus.PENDING
