# -*- coding: utf-8 -*-
"""
Сервис AI проверки статей.

- quick_report: markdown отчёт Perplexity с оценкой доверия
- full_report: скрапинг источников + JSON отчёт Gemini
- source_based_check / external_evidence_check: отчёты по сохранённой статье
- search_claim: краткая сводка по одному утверждению
- verify_article: проверка после отправки Factual статьи, решает статус

Провайдеры синхронные, вызываются через run_in_threadpool.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool

from newsgrid.application.verification import prompts
from newsgrid.domain.entities.article import Article
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.services.trust_score import (
    credibility_rating,
    extract_json,
    parse_citations,
    parse_trust_score,
    score_from_report,
)
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.source import Source
from newsgrid.infrastructure.ai.llm_provider import LLMProviderFactory, PerplexityProvider
from newsgrid.infrastructure.config.settings import Settings, get_settings
from newsgrid.infrastructure.web.scrapfly_client import ScrapflyClient
from newsgrid.shared.exceptions.domain_exceptions import BusinessRuleViolation, EntityNotFoundError
from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SOURCE_EXCERPT_LENGTH = 2000
ARTICLE_PROMPT_LENGTH = 15000
REPORT_MAX_TOKENS = 4096
QUICK_REPORT_TEMPERATURE = 0.2
FULL_REPORT_FAILED = "Comprehensive analysis failed to complete."


# =============================================================================
# Результаты
# =============================================================================

@dataclass
class QuickReport:
    """Markdown отчёт с разобранной оценкой."""

    report: str
    trust_score: Optional[int]
    credibility_rating: Optional[str]
    citations: List[str] = field(default_factory=list)
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report": self.report,
            "trust_score": self.trust_score,
            "credibility_rating": self.credibility_rating,
            "citations": self.citations,
            "model": self.model,
        }


@dataclass
class ClaimSearchResult:
    summary: str
    sources: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class VerificationOutcome:
    """Итог проверки статьи после отправки."""

    article: Article
    trust_score: Optional[int]
    status: ArticleStatus

    @property
    def decided(self) -> bool:
        return self.status is not ArticleStatus.PENDING_AI_VERIFICATION


@dataclass
class ScrapedSource:
    url: str
    content: str
    is_broken: bool


def format_sources(sources: Sequence[Source]) -> str:
    """Источники статьи одной строкой на источник."""
    if not sources:
        return prompts.NO_SOURCES
    return "\n".join(source.value for source in sources)


def _now() -> str:
    return datetime.utcnow().isoformat()


class VerificationService:
    """
    Сервис AI проверки.

    Работает с репозиторием статей только для операций над сохранённой
    статьёй; quick_report и search_claim от базы не зависят.
    """

    def __init__(
        self,
        articles: IArticleRepository,
        providers: Optional[LLMProviderFactory] = None,
        scraper: Optional[ScrapflyClient] = None,
        settings: Optional[Settings] = None
    ):
        self.articles = articles
        self.settings = settings or get_settings()
        self.providers = providers or LLMProviderFactory(self.settings)
        self.scraper = scraper or ScrapflyClient(self.settings)

    # =========================================================================
    # Быстрый отчёт
    # =========================================================================

    async def quick_report(self, headline: str, content: str, sources: str = "") -> QuickReport:
        """
        Отчёт Perplexity по заголовку, тексту и источникам.

        Raises:
            ExternalServiceError: Ошибка Perplexity
        """
        provider = self.providers.perplexity(
            model=self.settings.perplexity_report_model,
            temperature=QUICK_REPORT_TEMPERATURE,
        )
        messages = [
            {"role": "system", "content": prompts.QUICK_REPORT_SYSTEM_PROMPT},
            {"role": "user", "content": prompts.QUICK_REPORT_USER_PROMPT.format(
                headline=headline,
                content=content,
                sources=sources or prompts.NO_SOURCES,
            )},
        ]
        result = await run_in_threadpool(provider.chat, messages)
        report = PerplexityProvider.message_content(result)

        score = parse_trust_score(report)
        citations = list(result.get("citations") or []) or parse_citations(report)
        logger.info(f"[Quick] trust_score={score}")

        return QuickReport(
            report=report,
            trust_score=score,
            credibility_rating=credibility_rating(score),
            citations=citations,
            model=result.get("model") or provider.model,
        )

    # =========================================================================
    # Полный отчёт
    # =========================================================================

    async def _scrape(self, url: str) -> ScrapedSource:
        try:
            result = await self.scraper.scrape(url)
        except ExternalServiceError as e:
            return ScrapedSource(url=url, content=f"Failed to scrape: {e}", is_broken=True)
        return ScrapedSource(url=url, content=result.content, is_broken=result.is_broken)

    async def _sources_block(self, sources: Sequence[Source]) -> str:
        urls = [source.value for source in sources if source.is_url]
        if not urls:
            return prompts.NO_URL_SOURCES

        scraped = await asyncio.gather(*(self._scrape(url) for url in urls))
        return "\n\n---\n\n".join(
            prompts.FULL_REPORT_SOURCE_BLOCK.format(
                index=index,
                url=source.url,
                broken=str(source.is_broken).lower(),
                content=source.content[:SOURCE_EXCERPT_LENGTH],
            )
            for index, source in enumerate(scraped, start=1)
        )

    async def full_report(
        self,
        headline: str,
        content: str,
        sources: Sequence[Source] = (),
        draft_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None
    ) -> Dict[str, Any]:
        """
        JSON отчёт Gemini по статье и скрапнутым источникам.

        Ошибки не пробрасываются: результат {"error": ...}. Успешный отчёт
        сохраняется в analysis_result черновика, если черновик принадлежит
        user_id.
        """
        try:
            prompt = prompts.FULL_REPORT_PROMPT.format(
                headline=headline,
                content=content[:ARTICLE_PROMPT_LENGTH],
                sources=await self._sources_block(sources),
            )
            provider = self.providers.google()
            text = await run_in_threadpool(provider.generate, prompt)
        except ExternalServiceError as e:
            logger.error(f"[Full] Gemini analysis failed: {e}")
            return {"error": FULL_REPORT_FAILED}

        report = extract_json(text)
        if report is None:
            logger.error(f"[Full] Gemini returned non-JSON output: {text[:200]}")
            return {"error": FULL_REPORT_FAILED}

        logger.info(f"[Full] trust_score={score_from_report(report)}")
        if draft_id is not None:
            await self._store_draft_report(draft_id, user_id, report)
        return report

    async def _store_draft_report(
        self,
        draft_id: UUID,
        user_id: Optional[UUID],
        report: Dict[str, Any]
    ) -> None:
        article = await self.articles.find_by_id(draft_id)
        if article is None or not article.is_owned_by(user_id):
            logger.warning(f"[Full] draft {draft_id} not found or not owned by {user_id}, report not stored")
            return
        article.analysis_result = report
        article.updated_at = datetime.utcnow()
        await self.articles.update(article)
        logger.info(f"[Full] report stored for draft {draft_id}")

    # =========================================================================
    # Отчёты по сохранённой статье
    # =========================================================================

    async def _get_article(self, article_id: UUID) -> Article:
        article = await self.articles.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article not found.")
        return article

    async def _complete(self, model: str, prompt: str) -> str:
        provider = self.providers.perplexity(model=model, max_tokens=REPORT_MAX_TOKENS)
        return await run_in_threadpool(provider.generate, prompt)

    async def source_based_check(self, article_id: UUID) -> str:
        """Отчёт только по источникам автора (offline модель)."""
        article = await self._get_article(article_id)
        prompt = prompts.SOURCE_BASED_PROMPT.format(
            content=article.content,
            last_updated=article.updated_at.date().isoformat(),
            headline=article.headline,
            sources=format_sources(article.sources),
        )
        report = await self._complete(self.settings.perplexity_offline_model, prompt)

        article.merge_analysis(source_based_report=report, source_based_report_at=_now())
        await self.articles.update(article)
        logger.info(f"[SourceBased] report stored for {article_id}")
        return report

    async def external_evidence_check(self, article_id: UUID) -> str:
        """Проверка утверждений по открытым источникам (online модель)."""
        article = await self._get_article(article_id)
        prompt = prompts.EXTERNAL_EVIDENCE_PROMPT.format(
            headline=article.headline,
            last_updated=article.updated_at.date().isoformat(),
            content=article.content,
        )
        report = await self._complete(self.settings.perplexity_online_model, prompt)

        article.merge_analysis(external_evidence_report=report, external_evidence_report_at=_now())
        await self.articles.update(article)
        logger.info(f"[External] report stored for {article_id}")
        return report

    # =========================================================================
    # Поиск по утверждению
    # =========================================================================

    async def search_claim(self, claim: str) -> ClaimSearchResult:
        """Сводка по утверждению. Ошибка Perplexity даёт заглушку без источников."""
        provider = self.providers.perplexity(model=self.settings.perplexity_search_model)
        messages = [
            {"role": "system", "content": prompts.CLAIM_SEARCH_SYSTEM_PROMPT},
            {"role": "user", "content": claim},
        ]
        try:
            result = await run_in_threadpool(provider.chat, messages, return_sources=True)
            summary = PerplexityProvider.message_content(result)
        except ExternalServiceError as e:
            logger.error(f"[Claim] search failed for '{claim[:80]}': {e}")
            return ClaimSearchResult(summary=prompts.CLAIM_SEARCH_FALLBACK)

        sources = result["choices"][0].get("sources") or [
            {"name": url, "url": url} for url in result.get("citations") or []
        ]
        return ClaimSearchResult(summary=summary, sources=sources)

    # =========================================================================
    # Проверка после отправки
    # =========================================================================

    async def verify_article(self, article_id: UUID) -> VerificationOutcome:
        """
        Проверить Factual статью и решить её статус.

        Оценка >= ai_publish_threshold публикует статью, ниже - отклоняет.
        Без маркера оценки статья остаётся в Pending AI Verification.

        Raises:
            EntityNotFoundError: Статьи нет
            BusinessRuleViolation: Статья не ждёт AI проверки
            ExternalServiceError: Ошибка Perplexity
        """
        article = await self._get_article(article_id)
        if article.status is not ArticleStatus.PENDING_AI_VERIFICATION:
            raise BusinessRuleViolation(
                f"Article is not pending AI verification (status: {article.status.value})."
            )

        quick = await self.quick_report(
            article.headline,
            article.content,
            format_sources(article.sources),
        )

        article.merge_analysis(
            verification_report=quick.report,
            verification_citations=quick.citations,
            verification_report_at=_now(),
        )
        status = article.apply_ai_verdict(quick.trust_score, self.settings.ai_publish_threshold)
        saved = await self.articles.update(article)

        if quick.trust_score is None:
            logger.warning(f"[Verify] {article_id}: no trust score in report, status unchanged")
        else:
            logger.info(f"[Verify] {article_id}: trust_score={quick.trust_score} -> {status.value}")

        return VerificationOutcome(article=saved, trust_score=quick.trust_score, status=status)
