"""
Repository Interface: IArticleRepository

Порт (интерфейс) для работы с хранилищем статей.
Реализации (адаптеры) находятся в infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from newsgrid.domain.entities.article import Article
from newsgrid.domain.value_objects.article_status import ArticleStatus


class IArticleRepository(ABC):
    """
    Интерфейс репозитория статей.

    Возвращаемые статьи содержат author_full_name из профиля автора.
    """

    @abstractmethod
    async def add(self, article: Article) -> Article:
        """
        Сохранить новую статью.

        Raises:
            DuplicateEntityError: Если slug уже занят
        """
        pass

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """
        Сохранить изменения существующей статьи.

        Raises:
            EntityNotFoundError: Если статьи нет
        """
        pass

    @abstractmethod
    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Article]:
        pass

    @abstractmethod
    async def find_by_ids(self, article_ids: Sequence[UUID]) -> List[Article]:
        pass

    @abstractmethod
    async def slugs_starting_with(self, prefix: str) -> List[str]:
        """
        Все slug, начинающиеся с prefix.

        Используется для подбора свободного суффикса при коллизии.
        """
        pass

    @abstractmethod
    async def find_published(
        self,
        category: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[Article]:
        """
        Опубликованные статьи, новые первыми.

        Args:
            category: Фильтр по категории (без учёта регистра)
        """
        pass

    @abstractmethod
    async def search_published(self, query: str, limit: int = 50) -> List[Article]:
        """Поиск опубликованных статей по подстроке заголовка."""
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_id: UUID,
        status: Optional[ArticleStatus] = None
    ) -> List[Article]:
        """Статьи автора, новые первыми."""
        pass

    @abstractmethod
    async def find_by_status(self, status: ArticleStatus, oldest_first: bool = True) -> List[Article]:
        pass

    @abstractmethod
    async def delete(self, article_id: UUID) -> bool:
        """
        Удалить статью.

        Returns:
            True если удалена
        """
        pass
