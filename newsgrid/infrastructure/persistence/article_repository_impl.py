# -*- coding: utf-8 -*-
"""
PostgreSQL Repository реализация для статей.

Маппинг Article entity ↔ ArticleModel, имя автора подтягивается
join'ом профиля.
"""

import logging
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsgrid.domain.entities.article import Article, UNKNOWN_AUTHOR
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.domain.value_objects.source import Source
from newsgrid.infrastructure.persistence.models import ArticleModel, ProfileModel
from newsgrid.shared.exceptions.domain_exceptions import DuplicateEntityError, EntityNotFoundError
from newsgrid.shared.exceptions.infrastructure_exceptions import DatabaseError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: IntegrityError) -> bool:
    """Нарушение уникальности (slug), а не внешнего ключа или NOT NULL."""
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION
    return "unique" in str(error.orig).lower()


class ArticleRepositoryImpl(IArticleRepository):
    """
    Реализация repository для PostgreSQL.

    Адаптер в Hexagonal Architecture.
    """

    def __init__(self, session: AsyncSession):
        """
        Инициализация репозитория.

        Аргументы:
            session: Асинхронная сессия SQLAlchemy
        """
        self.session = session

    async def add(self, article: Article) -> Article:
        """
        Сохранить новую статью в БД.

        Если у автора ещё нет строки в profiles (нет триггера регистрации),
        она создаётся пустой, иначе вставка упадёт на внешнем ключе.
        """
        if article.author_id is not None and await self.session.get(ProfileModel, article.author_id) is None:
            self.session.add(ProfileModel(id=article.author_id))
        model = ArticleModel(id=article.id)
        self._apply(model, article)
        model.created_at = article.created_at
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if _is_unique_violation(e):
                logger.warning(f"Article insert conflict for slug '{article.slug}': {e.orig}")
                raise DuplicateEntityError("An article with a similar headline already exists.") from e
            logger.error(f"Article insert failed for {article.id}: {e.orig}")
            raise DatabaseError(f"Failed to save article: {e.orig}") from e
        return await self._reload(article.id)

    async def update(self, article: Article) -> Article:
        """Сохранить изменения статьи."""
        model = await self.session.get(ArticleModel, article.id)
        if model is None:
            raise EntityNotFoundError(f"Article {article.id} not found")
        self._apply(model, article)
        await self.session.commit()
        return await self._reload(article.id)

    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        """Найти статью по ID."""
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.id == article_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_slug(self, slug: str) -> Optional[Article]:
        """Найти статью по slug."""
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.slug == slug)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_ids(self, article_ids: Sequence[UUID]) -> List[Article]:
        if not article_ids:
            return []
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.id.in_(list(article_ids)))
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def slugs_starting_with(self, prefix: str) -> List[str]:
        """Все slug с данным префиксом одним запросом."""
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        result = await self.session.execute(
            select(ArticleModel.slug).where(ArticleModel.slug.like(f"{escaped}%", escape="\\"))
        )
        return list(result.scalars().all())

    async def find_published(
        self,
        category: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[Article]:
        """Опубликованные статьи с фильтром по категории."""
        query = select(ArticleModel).where(ArticleModel.status == ArticleStatus.PUBLISHED.value)

        if category:
            query = query.where(ArticleModel.category.ilike(category))

        query = query.order_by(ArticleModel.created_at.desc()).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def search_published(self, query: str, limit: int = 50) -> List[Article]:
        result = await self.session.execute(
            select(ArticleModel)
            .where(ArticleModel.status == ArticleStatus.PUBLISHED.value)
            .where(ArticleModel.headline.ilike(f"%{query}%"))
            .order_by(ArticleModel.created_at.desc())
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_author(
        self,
        author_id: UUID,
        status: Optional[ArticleStatus] = None
    ) -> List[Article]:
        query = select(ArticleModel).where(ArticleModel.author_id == author_id)
        if status:
            query = query.where(ArticleModel.status == status.value)
        result = await self.session.execute(query.order_by(ArticleModel.created_at.desc()))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_status(self, status: ArticleStatus, oldest_first: bool = True) -> List[Article]:
        order = ArticleModel.created_at.asc() if oldest_first else ArticleModel.created_at.desc()
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.status == status.value).order_by(order)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def delete(self, article_id: UUID) -> bool:
        """Удалить статью по ID."""
        model = await self.session.get(ArticleModel, article_id)
        if model:
            await self.session.delete(model)
            await self.session.commit()
            return True
        return False

    # =========================================================================
    # Маппинг Entity ↔ Model
    # =========================================================================

    async def _reload(self, article_id: UUID) -> Article:
        self.session.expire_all()
        article = await self.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError(f"Article {article_id} not found")
        return article

    @staticmethod
    def _apply(model: ArticleModel, entity: Article) -> None:
        """Перенести изменяемые поля сущности в модель."""
        model.headline = entity.headline
        model.content = entity.content
        model.excerpt = entity.excerpt
        model.category = entity.category
        model.slug = entity.slug
        model.status = entity.status.value
        model.article_type = entity.article_type.value
        model.sources = [s.to_dict() for s in entity.sources]
        model.trust_score = entity.trust_score
        model.analysis_result = entity.analysis_result or {}
        model.author_id = entity.author_id
        model.updated_at = entity.updated_at

    @staticmethod
    def _to_entity(model: ArticleModel) -> Article:
        """
        Конвертация ArticleModel → Article.

        None значения JSON полей заменяются на пустые коллекции.
        """
        author_name = model.author.full_name if model.author and model.author.full_name else UNKNOWN_AUTHOR
        return Article(
            id=model.id,
            author_id=model.author_id,
            slug=model.slug,
            headline=model.headline,
            content=model.content or "",
            excerpt=model.excerpt or "",
            category=model.category or "",
            article_type=ArticleType(model.article_type),
            sources=[Source.from_dict(s) for s in (model.sources or [])],
            status=ArticleStatus(model.status),
            trust_score=model.trust_score,
            analysis_result=model.analysis_result or {},
            created_at=model.created_at,
            updated_at=model.updated_at,
            author_full_name=author_name,
        )
