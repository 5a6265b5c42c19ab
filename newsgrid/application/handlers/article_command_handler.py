"""
Command Handler для статей.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from newsgrid.application.commands.article_commands import SubmitArticleCommand, UpdateDraftCommand
from newsgrid.domain.entities.article import Article
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.services.slug_service import slugify, unique_slug
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    PermissionDenied,
)

logger = logging.getLogger(__name__)

MESSAGE_DRAFT = "Draft saved."
MESSAGE_FACTUAL = "Factual article submitted and is now pending AI verification."
MESSAGE_PUBLISHED = "Article published successfully!"


@dataclass(frozen=True)
class SubmissionResult:
    """Итог отправки: статья и нужно ли запускать AI проверку."""

    article: Article
    trigger_ai: bool
    message: str


def _submission_message(article: Article) -> str:
    if article.status is ArticleStatus.DRAFT:
        return MESSAGE_DRAFT
    if article.status is ArticleStatus.PENDING_AI_VERIFICATION:
        return MESSAGE_FACTUAL
    return MESSAGE_PUBLISHED


class ArticleCommandHandler:
    """Handler для команд работы со статьями."""

    def __init__(self, repository: IArticleRepository):
        self.repository = repository

    async def _free_slug(self, headline: str, own_slug: Optional[str] = None) -> str:
        base = slugify(headline)
        if not base:
            raise DomainValidationError("Headline must contain letters or digits.")
        taken = set(await self.repository.slugs_starting_with(base))
        taken.discard(own_slug)
        return unique_slug(base, taken)

    async def handle_submit(self, command: SubmitArticleCommand) -> SubmissionResult:
        """
        Обработка команды отправки статьи.

        Returns:
            SubmissionResult со статьёй и флагом AI проверки

        Raises:
            DomainValidationError: Нет обязательных полей или источников для Factual
            DuplicateEntityError: Slug занят конкурентной вставкой
        """
        if not command.headline or not command.headline.strip():
            raise DomainValidationError("Headline, content, category, and article type are required.")
        if not command.save_as_draft and (
            not command.content or not command.content.strip() or not command.category
        ):
            raise DomainValidationError("Headline, content, category, and article type are required.")

        article = Article(
            author_id=command.author_id,
            headline=command.headline.strip(),
            content=command.content or "",
            category=(command.category or "").strip(),
            article_type=command.article_type,
            sources=list(command.sources),
            status=ArticleStatus.DRAFT,
        )
        if not command.save_as_draft:
            article.submit()

        article.slug = await self._free_slug(article.headline)
        saved = await self.repository.add(article)

        trigger_ai = saved.status is ArticleStatus.PENDING_AI_VERIFICATION
        logger.info(
            f"[Submit] {saved.id} type={saved.article_type.value} status={saved.status.value} slug={saved.slug}"
        )
        return SubmissionResult(article=saved, trigger_ai=trigger_ai, message=_submission_message(saved))

    async def _owned_draft(self, article_id: UUID, author_id: UUID) -> Article:
        article = await self.repository.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article not found.")
        if not article.is_owned_by(author_id):
            raise PermissionDenied("Forbidden: You are not the author of this article.")
        return article

    async def handle_update_draft(self, command: UpdateDraftCommand) -> Article:
        """Редактирование черновика автором. Slug следует за заголовком."""
        article = await self._owned_draft(command.article_id, command.author_id)
        headline_changed = command.headline is not None and command.headline.strip() != article.headline

        article.edit(
            headline=command.headline.strip() if command.headline is not None else None,
            content=command.content,
            category=command.category,
            article_type=command.article_type,
            sources=command.sources,
        )
        if headline_changed:
            article.slug = await self._free_slug(article.headline, own_slug=article.slug)

        return await self.repository.update(article)

    async def handle_submit_draft(self, article_id: UUID, author_id: UUID) -> SubmissionResult:
        """Отправить черновик по правилам его типа."""
        article = await self._owned_draft(article_id, author_id)
        article.submit()
        saved = await self.repository.update(article)

        trigger_ai = saved.status is ArticleStatus.PENDING_AI_VERIFICATION
        logger.info(f"[Submit] draft {saved.id} -> {saved.status.value}")
        return SubmissionResult(article=saved, trigger_ai=trigger_ai, message=_submission_message(saved))

