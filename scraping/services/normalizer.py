"""Text cleanup, classification and scoring for scraped articles."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from scraping.models.domain import Article, RawArticle

MAX_TAGS = 5

_BRACKETED = re.compile(r"\[.*?\]")
_PARENTHESIZED = re.compile(r"\(.*?\)")
_WHITESPACE = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")
_BYLINE = re.compile(r"[가-힣A-Za-z]+\s*기자\s*=\s*")
_BRACKETED_BYLINE = re.compile(r"\[[^\[\]]*기자\]")

KOREAN_CATEGORY_MAP: Tuple[Tuple[str, str], ...] = (
    ("정치", "정치"),
    ("경제", "경제"),
    ("사회", "사회"),
    ("국제", "국제"),
    ("문화", "문화"),
    ("스포츠", "스포츠"),
    ("연예", "연예"),
)

KOREAN_TAG_KEYWORDS: Tuple[str, ...] = (
    # 정치/정부
    "정부", "대통령", "국정감사", "선거", "정치",
    # 경제
    "경제", "주식", "부동산", "금리", "인플레이션",
    # 보건
    "코로나", "백신", "의료", "병원",
    # 교육
    "교육", "학교", "대학", "입시",
    # 기업
    "기업", "삼성", "LG", "현대", "SK",
    # 국가
    "북한", "중국", "미국", "일본", "러시아",
)


@dataclass(frozen=True)
class NormalizationRules:
    """Source-specific category map and tag vocabulary."""

    category_map: Sequence[Tuple[str, str]] = field(default=KOREAN_CATEGORY_MAP)
    tag_keywords: Sequence[str] = field(default=KOREAN_TAG_KEYWORDS)


KOREAN_NEWS_RULES = NormalizationRules()


def clean_title(title: str) -> str:
    cleaned = _BRACKETED.sub("", title)
    cleaned = _PARENTHESIZED.sub("", cleaned)
    return _WHITESPACE.sub(" ", cleaned).strip()


def clean_content(content: str) -> str:
    cleaned = _BYLINE.sub("", content)
    cleaned = _BRACKETED_BYLINE.sub("", cleaned)
    cleaned = _BLANK_LINES.sub("\n", cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned)
    return cleaned.strip()


def map_category(category: Optional[str], rules: NormalizationRules = KOREAN_NEWS_RULES) -> Optional[str]:
    if not category:
        return category
    for keyword, label in rules.category_map:
        if keyword in category:
            return label
    return category


def extract_tags(title: str, content: str, rules: NormalizationRules = KOREAN_NEWS_RULES) -> List[str]:
    text = f"{title} {content}".lower()
    tags: List[str] = []
    for keyword in rules.tag_keywords:
        if keyword.lower() in text and keyword not in tags:
            tags.append(keyword)
            if len(tags) == MAX_TAGS:
                break
    return tags


def calculate_quality_score(article: Article) -> int:
    """Completeness score in 0..100; advisory, never used for rejection."""
    score = 0
    if article.title and len(article.title) > 10:
        score += 20
    if article.content and len(article.content) > 200:
        score += 30
    if article.author:
        score += 10
    if article.published_at:
        score += 10
    if article.category:
        score += 10
    if article.image_url:
        score += 10
    if article.tags:
        score += 10
    return min(score, 100)


def _rejected(raw: RawArticle) -> Article:
    return Article(
        url=raw.url,
        author=raw.author,
        published_at=raw.published_at,
        category=raw.category,
        image_url=raw.image_url,
    )


def normalize(
    raw: RawArticle,
    rules: NormalizationRules = KOREAN_NEWS_RULES,
    *,
    min_content_length: int = 100,
) -> Article:
    """Clean, classify and score a raw article.

    Candidates without a title or body, or whose cleaned body is shorter than
    ``min_content_length``, come back with empty title and content.
    """
    if not raw.title or not raw.content:
        return _rejected(raw)

    title = clean_title(raw.title)
    content = clean_content(raw.content)
    if len(content) < min_content_length or not title:
        return _rejected(raw)

    now = datetime.now(timezone.utc)
    article = Article(
        id=str(uuid.uuid4()),
        url=raw.url,
        title=title,
        content=content,
        author=raw.author,
        published_at=raw.published_at,
        category=map_category(raw.category, rules),
        image_url=raw.image_url,
        tags=extract_tags(title, content, rules),
        created_at=now,
        updated_at=now,
    )
    article.quality_score = calculate_quality_score(article)
    return article
