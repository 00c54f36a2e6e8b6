from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scraping.errors import FetchError  # noqa: E402
from scraping.settings import NewsSource, Settings, SourceSelectors, reset_settings_cache  # noqa: E402

LIST_URL = "https://news.example.com/national/"

LONG_BODY = (
    "정부는 오늘 내년도 예산안을 발표하며 경제 회복을 최우선 과제로 삼겠다고 밝혔다. "
    "예산안에는 일자리 창출과 지역 균형 발전을 위한 사업이 다수 포함됐으며, "
    "전문가들은 재정 건전성과 성장 사이의 균형을 어떻게 맞출지가 관건이라고 평가했다. "
    "국회는 다음 달부터 본격적인 심사에 착수할 예정이다."
)


class FakeFetcher:
    """In-memory PageFetcher keyed by URL."""

    def __init__(self, pages: Dict[str, str], failing: Iterable[str] = ()) -> None:
        self.pages = dict(pages)
        self.failing = set(failing)
        self.acquired = 0
        self.released = 0
        self.loaded: List[str] = []

    async def acquire_session(self) -> str:
        self.acquired += 1
        return f"session-{self.acquired}"

    async def load_page(self, session: str, url: str) -> str:
        self.loaded.append(url)
        if url in self.failing:
            raise FetchError(f"페이지 로드 오류: {url} (ConnectError)")
        if url not in self.pages:
            raise FetchError("페이지 응답 오류: 404")
        return self.pages[url]

    async def release_session(self, session: str) -> None:
        self.released += 1


def _article_html(
    title: str,
    body: str = LONG_BODY,
    *,
    author: Optional[str] = None,
    published: Optional[str] = None,
    category: Optional[str] = None,
    image: Optional[str] = None,
) -> str:
    parts = ["<html><head><title>news</title></head><body>"]
    if category:
        parts.append(f'<span class="section">{category}</span>')
    parts.append(f'<h1 class="headline">{title}</h1>')
    if author:
        parts.append(f'<span class="byline">{author}</span>')
    if published:
        parts.append(f'<time class="published" datetime="{published}">{published}</time>')
    if image:
        parts.append(f'<div class="photo"><img src="{image}"></div>')
    parts.append(f'<div class="article-body"><p>{body}</p></div>')
    parts.append("</body></html>")
    return "".join(parts)


def _listing_html(hrefs: Iterable[str]) -> str:
    anchors = "".join(f'<li><a class="article-link" href="{href}">기사</a></li>' for href in hrefs)
    return f"<html><body><ul>{anchors}</ul><a href='/about'>소개</a></body></html>"


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def news_source() -> NewsSource:
    return NewsSource(
        id="example",
        name="예제일보",
        base_url="https://news.example.com",
        list_page_url=LIST_URL,
        selectors=SourceSelectors(
            article_links="a.article-link",
            title="h1.headline",
            content="div.article-body",
            author=".byline",
            published_at="time.published",
            category=".section",
            image_url=".photo img",
        ),
    )


@pytest.fixture
def scrape_settings(news_source: NewsSource) -> Settings:
    return Settings(sources=[news_source], delay_between_requests_ms=0, retry_attempts=1)


@pytest.fixture
def article_html() -> Callable[..., str]:
    return _article_html


@pytest.fixture
def listing_html() -> Callable[[Iterable[str]], str]:
    return _listing_html


@pytest.fixture
def fake_fetcher_cls() -> type[FakeFetcher]:
    return FakeFetcher
