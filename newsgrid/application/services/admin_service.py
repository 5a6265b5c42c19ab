"""
Административный слой: очередь проверки и переопределение статусов.
"""

import logging
from typing import List
from uuid import UUID

from newsgrid.domain.entities.article import Article
from newsgrid.domain.entities.profile import ADMIN_ROLE
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.repositories.user_repository import IUserRoleRepository
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError, EntityNotFoundError

logger = logging.getLogger(__name__)


class AdminService:

    def __init__(self, articles: IArticleRepository, roles: IUserRoleRepository):
        self.articles = articles
        self.roles = roles

    async def is_admin(self, user_id: UUID) -> bool:
        return await self.roles.has_role(user_id, ADMIN_ROLE)

    async def grant_role(self, user_id: UUID, role: str = ADMIN_ROLE) -> None:
        await self.roles.grant(user_id, role)
        logger.info(f"[Admin] role '{role}' granted to {user_id}")

    async def list_by_status(self, status: str = ArticleStatus.PENDING_REVIEW.value) -> List[Article]:
        """Статьи в статусе, старые первыми."""
        return await self.articles.find_by_status(ArticleStatus.parse(status), oldest_first=True)

    async def override_status(self, article_id: UUID, status: str) -> Article:
        """
        Переопределить статус статьи.

        Raises:
            DomainValidationError: Статус вне Published / Rejected / pending_review
            EntityNotFoundError: Статьи нет
        """
        try:
            new_status = ArticleStatus(status)
        except ValueError:
            new_status = None
        if new_status not in ArticleStatus.admin_override_targets():
            raise DomainValidationError(
                "Invalid status provided. Must be Published, Rejected, or pending_review."
            )

        article = await self.articles.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article not found or failed to update.")

        article.override_status(new_status)
        logger.info(f"[Admin] {article.id} -> {new_status.value}")
        return await self.articles.update(article)
