# -*- coding: utf-8 -*-
"""
API Routes: AI проверка и веб-утилиты формы отправки.

    POST /advanced-verify   -> text/event-stream, одно событие с JSON отчётом
    POST /ai-verify-article -> решение по статусу Factual статьи
"""

import json
import logging
from typing import AsyncIterator, List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from newsgrid.api.dependencies import (
    get_optional_user,
    get_page_title_fetcher,
    get_url_checker,
    get_verification_service,
)
from newsgrid.api.schemas.verification_schemas import (
    AdvancedVerifyRequest,
    ArticleIdRequest,
    ClaimSearchRequest,
    ClaimSearchResponse,
    PageTitleRequest,
    PageTitleResponse,
    QuickReportResponse,
    ReportResponse,
    UrlCheckResponse,
    VerificationResponse,
    VerifyArticleRequest,
)
from newsgrid.application.verification.verification_service import VerificationService
from newsgrid.domain.services.trust_score import credibility_rating
from newsgrid.domain.value_objects.source import Source
from newsgrid.infrastructure.auth.supabase_auth import AuthUser
from newsgrid.infrastructure.web.page_title import PageTitleFetcher
from newsgrid.infrastructure.web.url_checker import UrlChecker
from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


def _required_article_id(request: ArticleIdRequest) -> UUID:
    if request.article_id is None:
        raise DomainValidationError("Missing article_id")
    return request.article_id


def _sse(payload: dict) -> str:
    return f"data: {json.dumps(payload, default=str)}\n\n"


# =============================================================================
# Веб-утилиты
# =============================================================================

@router.get("/check-url", response_model=UrlCheckResponse)
async def check_url(
    url: str = "",
    checker: UrlChecker = Depends(get_url_checker)
):
    """Проверка, что ссылка источника жива и содержит статью."""
    if not url.strip():
        raise DomainValidationError("URL parameter is required")
    result = await checker.check(url.strip())
    return UrlCheckResponse(**result.to_dict())


@router.post("/get-page-title", response_model=PageTitleResponse)
async def get_page_title(
    request: PageTitleRequest,
    fetcher: PageTitleFetcher = Depends(get_page_title_fetcher)
):
    page = await fetcher.fetch(request.url)
    return PageTitleResponse(title=page.title, hostname=page.hostname)


# =============================================================================
# Отчёты
# =============================================================================

@router.post("/verify-article", response_model=QuickReportResponse)
async def verify_article(
    request: VerifyArticleRequest,
    service: VerificationService = Depends(get_verification_service)
):
    """Быстрый отчёт Perplexity по данным формы."""
    if not request.headline or not request.articleContent:
        raise DomainValidationError("headline and articleContent are required")

    sources = request.userSources
    if isinstance(sources, list):
        sources = "\n".join(sources)

    report = await service.quick_report(request.headline, request.articleContent, sources or "")
    return QuickReportResponse(**report.to_dict())


@router.post("/advanced-verify")
async def advanced_verify(
    request: AdvancedVerifyRequest,
    user: Optional[AuthUser] = Depends(get_optional_user),
    service: VerificationService = Depends(get_verification_service)
):
    """Полный отчёт Gemini потоком Server-Sent Events."""
    if not request.headline or not request.content:
        raise DomainValidationError("Headline and content are required.")

    sources: List[Source] = [s.to_entity() for s in request.sources]

    async def stream() -> AsyncIterator[str]:
        report = await service.full_report(
            request.headline,
            request.content,
            sources,
            draft_id=request.draftId,
            user_id=user.id if user else None,
        )
        yield _sse(report)

    return StreamingResponse(
        stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/source-based-check", response_model=ReportResponse)
async def source_based_check(
    request: ArticleIdRequest,
    service: VerificationService = Depends(get_verification_service)
):
    article_id = _required_article_id(request)
    report = await service.source_based_check(article_id)
    return ReportResponse(message=f"Source-based check for article {article_id} complete.", report=report)


@router.post("/external-evidence-check", response_model=ReportResponse)
async def external_evidence_check(
    request: ArticleIdRequest,
    service: VerificationService = Depends(get_verification_service)
):
    article_id = _required_article_id(request)
    report = await service.external_evidence_check(article_id)
    return ReportResponse(message=f"External evidence check for article {article_id} complete.", report=report)


@router.post("/ai-verify-article", response_model=VerificationResponse)
async def ai_verify_article(
    request: ArticleIdRequest,
    service: VerificationService = Depends(get_verification_service)
):
    """Запустить проверку Factual статьи и применить решение."""
    outcome = await service.verify_article(_required_article_id(request))
    return VerificationResponse(
        article_id=outcome.article.id,
        status=outcome.status.value,
        trust_score=outcome.trust_score,
        credibility_rating=credibility_rating(outcome.trust_score),
    )


@router.post("/claims/search", response_model=ClaimSearchResponse)
async def search_claim(
    request: ClaimSearchRequest,
    service: VerificationService = Depends(get_verification_service)
):
    result = await service.search_claim(request.claim)
    return ClaimSearchResponse(summary=result.summary, sources=result.sources)
