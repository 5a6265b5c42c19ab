"""
Тесты маршрутов AI проверки и веб-утилит.
"""

import json
import pytest
from unittest.mock import AsyncMock, MagicMock

from newsgrid.api import dependencies
from newsgrid.application.verification.verification_service import VerificationService
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.infrastructure.config.settings import Settings
from newsgrid.infrastructure.web.page_title import PageTitle
from newsgrid.infrastructure.web.url_checker import UrlCheckResult
from newsgrid.main import app
from tests.conftest import make_article, url_source


@pytest.fixture
def perplexity():
    provider = MagicMock()
    provider.model = "sonar-pro"
    return provider


@pytest.fixture
def gemini():
    return MagicMock()


@pytest.fixture
def verification(client, articles, perplexity, gemini):
    providers = MagicMock()
    providers.perplexity.return_value = perplexity
    providers.google.return_value = gemini
    service = VerificationService(
        articles,
        providers=providers,
        scraper=MagicMock(),
        settings=Settings(ai_publish_threshold=50),
    )
    app.dependency_overrides[dependencies.get_verification_service] = lambda: service
    return service


def test_check_url(client):
    checker = MagicMock()
    checker.check = AsyncMock(return_value=UrlCheckResult("broken", "Invalid (Page not found)"))
    app.dependency_overrides[dependencies.get_url_checker] = lambda: checker

    response = client.get("/api/v1/check-url", params={"url": "https://example.com/gone"})

    assert response.json() == {"status": "broken", "reason": "Invalid (Page not found)"}


def test_check_url_requires_url(client):
    assert client.get("/api/v1/check-url").status_code == 400


def test_get_page_title(client):
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=PageTitle(title="Budget", hostname="example.com"))
    app.dependency_overrides[dependencies.get_page_title_fetcher] = lambda: fetcher

    response = client.post("/api/v1/get-page-title", json={"url": "https://www.example.com/x"})

    assert response.json() == {"title": "Budget", "hostname": "example.com"}


def test_get_page_title_invalid_url(client):
    response = client.post("/api/v1/get-page-title", json={"url": "ftp://example.com"})

    assert response.status_code == 400


def test_get_page_title_missing_url(client):
    response = client.post("/api/v1/get-page-title", json={})

    assert response.status_code == 400
    assert "url" in response.json()["detail"]


def test_verify_article_quick_report(client, verification, perplexity):
    perplexity.chat.return_value = {"choices": [{"message": {"content": "Trust Score: 55/100"}}]}

    response = client.post(
        "/api/v1/verify-article",
        json={"headline": "H", "articleContent": "C", "userSources": ["https://a.example.com"]},
    )

    data = response.json()
    assert response.status_code == 200
    assert data["trust_score"] == 55
    assert data["credibility_rating"] == "Mixed"


def test_verify_article_requires_fields(client, verification):
    response = client.post("/api/v1/verify-article", json={"headline": "H"})

    assert response.status_code == 400


def test_verify_article_upstream_failure(client, verification, perplexity):
    from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError

    perplexity.chat.side_effect = ExternalServiceError("Perplexity 401: bad key", status_code=401)

    response = client.post("/api/v1/verify-article", json={"headline": "H", "articleContent": "C"})

    assert response.status_code == 500


def test_advanced_verify_streams_report(client, verification, gemini):
    gemini.generate.return_value = '{"trustScore": {"total": 70}, "finalSummary": "ok"}'

    response = client.post("/api/v1/advanced-verify", json={"headline": "H", "content": "C"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.text.startswith("data: ")
    assert json.loads(response.text[len("data: "):].strip()) == {
        "trustScore": {"total": 70},
        "finalSummary": "ok",
    }


def test_ai_verify_article(client, verification, articles, perplexity):
    article = make_article(
        article_type=ArticleType.FACTUAL,
        sources=[url_source()],
        status=ArticleStatus.PENDING_AI_VERIFICATION,
    )
    articles.items[article.id] = article
    perplexity.chat.return_value = {"choices": [{"message": {"content": "Trust Score: 20/100"}}]}

    response = client.post("/api/v1/ai-verify-article", json={"article_id": str(article.id)})

    assert response.json()["status"] == "Rejected - AI"
    assert response.json()["credibility_rating"] == "Unreliable"


def test_ai_verify_article_missing_id(client, verification):
    response = client.post("/api/v1/ai-verify-article", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing article_id"


def test_source_based_check_unknown_article(client, verification):
    response = client.post(
        "/api/v1/source-based-check",
        json={"article_id": "00000000-0000-0000-0000-000000000000"},
    )

    assert response.status_code == 404


def test_claim_search_fallback(client, verification, perplexity):
    from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError

    perplexity.chat.side_effect = ExternalServiceError("Perplexity 500", status_code=500)

    response = client.post("/api/v1/claims/search", json={"claim": "Water boils at 50C"})

    assert response.json() == {
        "summary": "Could not retrieve external evidence for this claim.",
        "sources": [],
    }
