"""
Unit tests для Article entity.
"""

import pytest
from uuid import uuid4

from newsgrid.domain.entities.article import Article, build_excerpt
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    InvalidStatusTransition,
)
from tests.conftest import make_article, url_source


def test_article_creation():
    """Тест создания черновика."""
    article = Article(headline="Test Article", content="Test content", category="Tech")

    assert article.headline == "Test Article"
    assert article.status == ArticleStatus.DRAFT
    assert article.article_type == ArticleType.REPORTING_RUMOR
    assert article.excerpt == "Test content"
    assert article.trust_score is None


def test_article_validation_empty_headline():
    """Тест валидации - пустой заголовок."""
    with pytest.raises(DomainValidationError):
        Article(headline="   ", content="Content")


def test_excerpt_truncated_to_150_chars():
    content = "x" * 200
    assert build_excerpt(content) == "x" * 150 + "..."
    assert build_excerpt("short") == "short"


def test_factual_submit_requires_sources():
    """Factual статью без источников отправить нельзя."""
    article = Article(
        headline="Inflation falls",
        content="Official data shows inflation fell.",
        category="Economy",
        article_type=ArticleType.FACTUAL,
    )

    with pytest.raises(DomainValidationError, match="Sources are mandatory"):
        article.submit()
    assert article.status == ArticleStatus.DRAFT


def test_factual_submit_goes_to_ai_verification():
    article = Article(
        headline="Inflation falls",
        content="Official data shows inflation fell.",
        category="Economy",
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
    )

    assert article.submit() == ArticleStatus.PENDING_AI_VERIFICATION


def test_rumor_submit_publishes_immediately():
    article = Article(headline="Rumor", content="Word on the street.", category="Local")

    assert article.submit() == ArticleStatus.PUBLISHED


def test_ai_verdict_publishes_at_threshold():
    article = make_article(
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
        status=ArticleStatus.PENDING_AI_VERIFICATION,
    )

    assert article.apply_ai_verdict(50, threshold=50) == ArticleStatus.PUBLISHED
    assert article.trust_score == 50


def test_ai_verdict_rejects_below_threshold():
    article = make_article(
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
        status=ArticleStatus.PENDING_AI_VERIFICATION,
    )

    assert article.apply_ai_verdict(49, threshold=50) == ArticleStatus.REJECTED_AI


def test_ai_verdict_without_score_keeps_status():
    article = make_article(
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
        status=ArticleStatus.PENDING_AI_VERIFICATION,
    )

    assert article.apply_ai_verdict(None, threshold=50) == ArticleStatus.PENDING_AI_VERIFICATION
    assert article.trust_score is None


def test_invalid_trust_score():
    """Тест невалидной оценки доверия."""
    article = make_article()

    with pytest.raises(DomainValidationError):
        article.set_trust_score(150)


def test_owner_cannot_publish_rejected_article():
    article = make_article(status=ArticleStatus.REJECTED)

    with pytest.raises(InvalidStatusTransition):
        article.transition_to(ArticleStatus.PUBLISHED)


def test_admin_override_from_rejected_ai():
    article = make_article(
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
        status=ArticleStatus.REJECTED_AI,
    )

    article.override_status(ArticleStatus.PUBLISHED)

    assert article.status == ArticleStatus.PUBLISHED


def test_admin_cannot_override_to_draft():
    article = make_article()

    with pytest.raises(InvalidStatusTransition):
        article.override_status(ArticleStatus.DRAFT)


def test_visibility():
    """Неопубликованную статью видит только автор."""
    author_id = uuid4()
    article = make_article(author_id=author_id, status=ArticleStatus.PENDING_REVIEW)

    assert article.is_visible_to(author_id)
    assert not article.is_visible_to(uuid4())
    assert not article.is_visible_to(None)


def test_edit_only_drafts():
    article = make_article()

    with pytest.raises(InvalidStatusTransition):
        article.edit(headline="New headline")


def test_merge_analysis_keeps_existing_reports():
    article = make_article(analysis_result={"source_based_report": "old"})

    article.merge_analysis(external_evidence_report="new")

    assert article.analysis_result == {
        "source_based_report": "old",
        "external_evidence_report": "new",
    }
