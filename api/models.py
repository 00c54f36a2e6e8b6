from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    success: bool
    data: Any | None = None
    message: str | None = None
    error: str | None = None
    path: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SupportedSource(BaseModel):
    id: str
    name: str
    enabled: bool


class ServiceStatus(BaseModel):
    service: str
    version: str
    uptime_seconds: float
    timestamp: datetime
    supported_sources: list[SupportedSource] = Field(default_factory=list)


class ArticleValidationRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    url: str | None = None


class ArticleValidation(BaseModel):
    is_valid: bool = True
    score: int = 85
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
