from __future__ import annotations

from datetime import datetime, timezone

import pytest

from scraping.models.domain import Article, RawArticle
from scraping.services.normalizer import (
    NormalizationRules,
    calculate_quality_score,
    clean_content,
    clean_title,
    extract_tags,
    map_category,
    normalize,
)

BODY = "가" * 150


def test_clean_title_strips_brackets_and_parentheses():
    assert clean_title("[속보] 제목 (종합)") == "제목"
    assert clean_title("  [단독]  여야   합의 (2보)  도출 ") == "여야 합의 도출"


def test_clean_title_is_idempotent():
    once = clean_title("[사설] 금리 (인상) 논란   재점화")
    assert clean_title(once) == once


def test_clean_content_removes_bylines_and_collapses_whitespace():
    raw = "(서울=연합뉴스) 홍길동 기자 = 정부가\n\n\n새 정책을   발표했다. [김철수 기자]"
    cleaned = clean_content(raw)
    assert "기자" not in cleaned
    assert "  " not in cleaned
    assert "\n" not in cleaned
    assert cleaned.startswith("(서울=연합뉴스) 정부가")
    assert cleaned.endswith("발표했다.")
    assert clean_content(cleaned) == cleaned


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("정부가 새 정책을 발표했다. [홍길동 기자] 관계자는 설명했다.", "정부가 새 정책을 발표했다. 관계자는 설명했다."),
        ("정부가 새 정책을 발표했다. 홍길동 기자 = 관계자는 설명했다.", "정부가 새 정책을 발표했다. 관계자는 설명했다."),
        ("첫 문단이다.\n\n[김철수 기자]\n\n둘째 문단이다.", "첫 문단이다. 둘째 문단이다."),
    ],
)
def test_clean_content_mid_text_byline_leaves_single_space(raw, expected):
    cleaned = clean_content(raw)
    assert cleaned == expected
    assert clean_content(cleaned) == cleaned


def test_clean_content_keeps_dateline_glued_to_reporter():
    cleaned = clean_content("(서울=연합뉴스)홍길동 기자 = 정부가 새 정책을 발표했다.")
    assert cleaned == "(서울=연합뉴스)정부가 새 정책을 발표했다."


def test_normalize_is_idempotent_on_its_own_output():
    raw = RawArticle(
        url="https://ex.com/a",
        title="[속보] 정부 새 정책 발표 (종합)",
        content="(서울=연합뉴스) 홍길동 기자 = 정부가 새 정책을 발표했다. [김철수 기자] " + BODY,
    )
    once = normalize(raw)
    again = normalize(RawArticle(url=raw.url, title=once.title, content=once.content))

    assert not once.is_rejected
    assert again.title == once.title
    assert again.content == once.content
    assert again.tags == once.tags


def test_normalize_rejects_short_content():
    raw = RawArticle(url="https://ex.com/a", title="충분히 긴 제목입니다", content="짧은 본문" * 5)
    article = normalize(raw)
    assert article.title == ""
    assert article.content == ""
    assert article.is_rejected


@pytest.mark.parametrize("title,content", [(None, BODY), ("제목입니다", None), ("", ""), ("[속보]", BODY)])
def test_normalize_rejects_missing_fields(title, content):
    article = normalize(RawArticle(url="https://ex.com/a", title=title, content=content))
    assert article.is_rejected


def test_normalize_content_threshold_is_configurable():
    raw = RawArticle(url="https://ex.com/a", title="제목입니다", content="가" * 50)
    assert normalize(raw).is_rejected
    assert not normalize(raw, min_content_length=40).is_rejected


def test_normalize_builds_article():
    published = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    raw = RawArticle(
        url="https://ex.com/a",
        title="[속보] 삼성 신제품 발표 (종합)",
        content="삼성전자가 새로운 반도체를 공개했다. " + BODY,
        author="홍길동",
        published_at=published,
        category="경제일반",
        image_url="https://ex.com/a.jpg",
    )
    article = normalize(raw)

    assert article.title == "삼성 신제품 발표"
    assert article.category == "경제"
    assert article.tags == ["삼성"]
    assert article.created_at == article.updated_at
    assert article.quality_score == calculate_quality_score(article)
    assert len(article.id) == 36
    assert normalize(raw).id != article.id


def test_map_category_first_match_and_passthrough():
    assert map_category("정치/사회") == "정치"
    assert map_category("국제경제") == "경제"
    assert map_category("IT과학") == "IT과학"
    assert map_category(None) is None

    rules = NormalizationRules(category_map=(("tech", "기술"),), tag_keywords=())
    assert map_category("Tech", rules) == "Tech"
    assert map_category("biotech", rules) == "기술"


def test_extract_tags_keeps_keyword_order_and_caps():
    text = "북한 관련 소식과 삼성 실적, 교육 개혁, 경제 전망, 정부 발표"
    tags = extract_tags("제목", text)
    assert tags == ["정부", "경제", "교육", "삼성", "북한"]

    more = text + " 중국 미국 일본"
    assert extract_tags("제목", more) == ["정부", "경제", "교육", "삼성", "북한"]


def test_extract_tags_is_case_insensitive_and_unique():
    tags = extract_tags("lg 그룹과 Sk 그룹", "LG와 LG, 그리고 sk")
    assert tags == ["LG", "SK"]


def _minimal_article(**overrides) -> Article:
    fields = {"url": "https://ex.com/a", "title": "짧은제목", "content": "가" * 120}
    fields.update(overrides)
    return Article(**fields)


def test_quality_score_minimal_and_maximum():
    assert calculate_quality_score(_minimal_article()) == 0
    full = _minimal_article(
        title="열 글자를 넘는 충분히 긴 제목",
        content="가" * 250,
        author="홍길동",
        published_at=datetime(2025, 1, 1),
        category="경제",
        image_url="https://ex.com/a.jpg",
        tags=["경제"],
    )
    assert calculate_quality_score(full) == 100


@pytest.mark.parametrize(
    "field,value",
    [
        ("author", "홍길동"),
        ("published_at", datetime(2025, 1, 1)),
        ("category", "경제"),
        ("image_url", "https://ex.com/a.jpg"),
        ("tags", ["경제"]),
    ],
)
def test_quality_score_increases_by_fixed_increment(field, value):
    base = _minimal_article()
    assert calculate_quality_score(_minimal_article(**{field: value})) == calculate_quality_score(base) + 10


def test_quality_score_length_bonuses():
    assert calculate_quality_score(_minimal_article(title="열한 글자 이상의 제목")) == 20
    assert calculate_quality_score(_minimal_article(content="가" * 201)) == 30
