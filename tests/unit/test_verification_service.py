"""
Unit tests для VerificationService с подменёнными провайдерами.
"""

import json
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

from newsgrid.application.verification.verification_service import VerificationService
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.domain.value_objects.source import Source
from newsgrid.infrastructure.config.settings import Settings
from newsgrid.infrastructure.web.scrapfly_client import ScrapeResult
from newsgrid.shared.exceptions.domain_exceptions import BusinessRuleViolation
from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError
from tests.conftest import make_article, url_source


def _completion(text, **extra):
    result = {"model": "sonar-pro", "choices": [{"message": {"content": text}}]}
    result.update(extra)
    return result


@pytest.fixture
def perplexity():
    provider = MagicMock()
    provider.model = "sonar-pro"
    return provider


@pytest.fixture
def gemini():
    return MagicMock()


@pytest.fixture
def scraper():
    return MagicMock()


@pytest.fixture
def service(articles, perplexity, gemini, scraper):
    providers = MagicMock()
    providers.perplexity.return_value = perplexity
    providers.google.return_value = gemini
    return VerificationService(
        articles,
        providers=providers,
        scraper=scraper,
        settings=Settings(ai_publish_threshold=50),
    )


def _pending_factual(**overrides):
    return make_article(
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
        status=ArticleStatus.PENDING_AI_VERIFICATION,
        **overrides
    )


# =============================================================================
# Быстрый отчёт и проверка после отправки
# =============================================================================

@pytest.mark.asyncio
async def test_quick_report_parses_score(service, perplexity):
    perplexity.chat.return_value = _completion(
        "### Independent Verification\nOK\n\nTrust Score: 86/100",
        citations=["https://example.org/a"],
    )

    report = await service.quick_report("Headline", "Content", "https://example.com")

    assert report.trust_score == 86
    assert report.credibility_rating == "Highly Credible"
    assert report.citations == ["https://example.org/a"]
    messages = perplexity.chat.call_args[0][0]
    assert messages[0]["role"] == "system"
    assert 'Headline: "Headline"' in messages[1]["content"]


@pytest.mark.asyncio
async def test_verify_article_publishes(service, articles, perplexity):
    article = _pending_factual()
    await articles.add(article)
    perplexity.chat.return_value = _completion("Trust Score: 72/100")

    outcome = await service.verify_article(article.id)

    assert outcome.status == ArticleStatus.PUBLISHED
    assert articles.items[article.id].trust_score == 72
    assert articles.items[article.id].analysis_result["verification_report"] == "Trust Score: 72/100"


@pytest.mark.asyncio
async def test_verify_article_rejects_low_score(service, articles, perplexity):
    article = _pending_factual()
    await articles.add(article)
    perplexity.chat.return_value = _completion("**Trust Score:** 31/100")

    outcome = await service.verify_article(article.id)

    assert outcome.status == ArticleStatus.REJECTED_AI
    assert outcome.trust_score == 31


@pytest.mark.asyncio
async def test_verify_article_without_marker_stays_pending(service, articles, perplexity):
    article = _pending_factual()
    await articles.add(article)
    perplexity.chat.return_value = _completion("I could not evaluate this article.")

    outcome = await service.verify_article(article.id)

    assert outcome.status == ArticleStatus.PENDING_AI_VERIFICATION
    assert not outcome.decided
    assert articles.items[article.id].trust_score is None


@pytest.mark.asyncio
async def test_verify_article_only_pending(service, articles):
    article = make_article()
    await articles.add(article)

    with pytest.raises(BusinessRuleViolation):
        await service.verify_article(article.id)


@pytest.mark.asyncio
async def test_verify_article_upstream_error_keeps_status(service, articles, perplexity):
    article = _pending_factual()
    await articles.add(article)
    perplexity.chat.side_effect = ExternalServiceError("Perplexity 500", status_code=500)

    with pytest.raises(ExternalServiceError):
        await service.verify_article(article.id)
    assert articles.items[article.id].status == ArticleStatus.PENDING_AI_VERIFICATION


# =============================================================================
# Полный отчёт
# =============================================================================

@pytest.mark.asyncio
async def test_full_report_marks_broken_sources(service, gemini, scraper):
    async def scrape(url):
        if "dead" in url:
            raise ExternalServiceError("Failed to scrape URL", service="scrapfly")
        return ScrapeResult(url=url, content="y" * 5000, status_code=200)

    scraper.scrape = AsyncMock(side_effect=scrape)
    gemini.generate.return_value = '```json\n{"trustScore": {"total": 60}, "finalSummary": "ok"}\n```'

    report = await service.full_report(
        "Headline",
        "Body",
        [
            Source(type="url", value="https://alive.example.com"),
            Source(type="url", value="https://dead.example.com"),
            Source(type="pdf", value="pdf text", name="doc.pdf"),
        ],
    )

    assert report["trustScore"]["total"] == 60
    assert scraper.scrape.await_count == 2
    prompt = gemini.generate.call_args[0][0]
    assert "Source [1]:\nURL: https://alive.example.com\nBROKEN: false" in prompt
    assert "BROKEN: true" in prompt
    assert "y" * 2001 not in prompt


@pytest.mark.asyncio
async def test_full_report_failure_returns_error(service, gemini):
    gemini.generate.side_effect = ExternalServiceError("Ошибка Google: 503", status_code=503)

    report = await service.full_report("Headline", "Body")

    assert report == {"error": "Comprehensive analysis failed to complete."}


@pytest.mark.asyncio
async def test_full_report_stored_on_owned_draft(service, articles, gemini):
    draft = make_article(status=ArticleStatus.DRAFT)
    await articles.add(draft)
    gemini.generate.return_value = json.dumps({"finalSummary": "fine"})

    await service.full_report("Headline", "Body", draft_id=draft.id, user_id=draft.author_id)

    assert articles.items[draft.id].analysis_result == {"finalSummary": "fine"}


@pytest.mark.asyncio
async def test_full_report_not_stored_for_other_user(service, articles, gemini):
    draft = make_article(status=ArticleStatus.DRAFT)
    await articles.add(draft)
    gemini.generate.return_value = json.dumps({"finalSummary": "fine"})

    await service.full_report("Headline", "Body", draft_id=draft.id, user_id=uuid4())

    assert articles.items[draft.id].analysis_result == {}


# =============================================================================
# Отчёты по статье и поиск
# =============================================================================

@pytest.mark.asyncio
async def test_source_and_external_reports_merge(service, articles, perplexity):
    article = make_article()
    await articles.add(article)
    perplexity.generate.side_effect = ["source report", "external report"]

    await service.source_based_check(article.id)
    await service.external_evidence_check(article.id)

    analysis = articles.items[article.id].analysis_result
    assert analysis["source_based_report"] == "source report"
    assert analysis["external_evidence_report"] == "external report"
    assert "source_based_report_at" in analysis
    assert "external_evidence_report_at" in analysis


@pytest.mark.asyncio
async def test_search_claim(service, perplexity):
    perplexity.chat.return_value = {
        "choices": [{
            "message": {"content": "The claim is supported."},
            "sources": [{"name": "Reuters", "url": "https://reuters.com/x"}],
        }]
    }

    result = await service.search_claim("The sky is blue")

    assert result.summary == "The claim is supported."
    assert result.sources == [{"name": "Reuters", "url": "https://reuters.com/x"}]


@pytest.mark.asyncio
async def test_search_claim_fallback(service, perplexity):
    perplexity.chat.side_effect = ExternalServiceError("Perplexity 500", status_code=500)

    result = await service.search_claim("The sky is green")

    assert result.summary == "Could not retrieve external evidence for this claim."
    assert result.sources == []


@pytest.mark.asyncio
async def test_search_claim_fallback_on_non_json_body(articles):
    """Реальный провайдер: битый JSON от Perplexity даёт запасной ответ."""
    settings = Settings(perplexity_api_key="pplx")
    service = VerificationService(articles, scraper=MagicMock(), settings=settings)
    response = MagicMock(status_code=200, text="<html>Bad Gateway</html>")
    response.json.side_effect = ValueError("Expecting value")

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post", return_value=response):
        result = await service.search_claim("The sky is green")

    assert result.summary == "Could not retrieve external evidence for this claim."
    assert result.sources == []


@pytest.mark.asyncio
async def test_full_report_non_json_body_returns_error(articles):
    settings = Settings(google_api_key="g")
    service = VerificationService(articles, scraper=MagicMock(), settings=settings)
    response = MagicMock(status_code=200, text="<html>Bad Gateway</html>")
    response.json.side_effect = ValueError("Expecting value")

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post", return_value=response):
        result = await service.full_report("Headline", "Body text", [])

    assert result == {"error": "Comprehensive analysis failed to complete."}
