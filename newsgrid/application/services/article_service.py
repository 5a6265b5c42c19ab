"""
Application Service для управления статьями.
"""

import logging
from typing import List, Optional
from uuid import UUID

from newsgrid.application.commands.article_commands import SubmitArticleCommand, UpdateDraftCommand
from newsgrid.application.handlers.article_command_handler import ArticleCommandHandler, SubmissionResult
from newsgrid.domain.entities.article import Article
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    PermissionDenied,
)

logger = logging.getLogger(__name__)


class ArticleService:
    """
    Application Service для статей.

    Координирует работу между handlers и репозиторием, проверяет права
    автора и видимость статей.
    """

    def __init__(
        self,
        repository: IArticleRepository,
        command_handler: ArticleCommandHandler
    ):
        self.repository = repository
        self.command_handler = command_handler

    # =========================================================================
    # Чтение
    # =========================================================================

    async def list_published(
        self,
        category: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[Article]:
        """Лента опубликованных статей."""
        return await self.repository.find_published(category=category, limit=limit, offset=offset)

    async def search_published(self, query: str) -> List[Article]:
        if not query or not query.strip():
            return []
        return await self.repository.search_published(query.strip())

    async def get_by_slug(self, slug: str, viewer_id: Optional[UUID] = None) -> Article:
        """
        Статья по slug.

        Raises:
            EntityNotFoundError: Нет статьи или она не опубликована и читатель не автор
        """
        article = await self.repository.find_by_slug(slug)
        if article is None or not article.is_visible_to(viewer_id):
            raise EntityNotFoundError("Article not found or not published")
        return article

    async def list_by_author(self, author_id: UUID, viewer_id: Optional[UUID] = None) -> List[Article]:
        """Автор видит все свои статьи, остальные - только опубликованные."""
        if viewer_id == author_id:
            return await self.repository.find_by_author(author_id)
        return await self.repository.find_by_author(author_id, status=ArticleStatus.PUBLISHED)

    async def list_drafts(self, user_id: UUID) -> List[Article]:
        return await self.repository.find_by_author(user_id, status=ArticleStatus.DRAFT)

    # =========================================================================
    # Команды
    # =========================================================================

    async def submit(self, command: SubmitArticleCommand) -> SubmissionResult:
        return await self.command_handler.handle_submit(command)

    async def update_draft(self, command: UpdateDraftCommand) -> Article:
        return await self.command_handler.handle_update_draft(command)

    async def submit_draft(self, article_id: UUID, user_id: UUID) -> SubmissionResult:
        return await self.command_handler.handle_submit_draft(article_id, user_id)

    async def _owned(self, slug: str, user_id: UUID) -> Article:
        article = await self.repository.find_by_slug(slug)
        if article is None:
            raise EntityNotFoundError("Article not found.")
        if not article.is_owned_by(user_id):
            raise PermissionDenied("Forbidden: You are not the author of this article.")
        return article

    async def set_status_by_owner(self, slug: str, user_id: UUID, status: str) -> Article:
        """
        Автор публикует статью или снимает её с публикации.

        Raises:
            DomainValidationError: Статус не Published / pending_review
            InvalidStatusTransition: Переход не разрешён из текущего статуса
        """
        article = await self._owned(slug, user_id)

        try:
            new_status = ArticleStatus(status)
        except ValueError:
            new_status = None
        if new_status not in ArticleStatus.owner_toggle_targets():
            raise DomainValidationError("Invalid status provided. Must be Published or pending_review.")

        article.transition_to(new_status)
        logger.info(f"[Owner] {article.id} -> {new_status.value}")
        return await self.repository.update(article)

    async def delete_by_owner(self, slug: str, user_id: UUID) -> None:
        article = await self._owned(slug, user_id)
        await self.repository.delete(article.id)
        logger.info(f"[Owner] {article.id} deleted")
