"""
Сборка главной ленты.

Части ленты читаются параллельно, каждая в своей сессии БД: одна
AsyncSession не допускает конкурентных запросов.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncContextManager, Callable, List, Optional
from uuid import UUID

from newsgrid.domain.entities.article import Article
from newsgrid.domain.entities.profile import Profile
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.repositories.bookmark_repository import IBookmarkRepository
from newsgrid.domain.repositories.category_repository import ICategoryRepository
from newsgrid.domain.repositories.user_repository import IProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """Набор репозиториев поверх одной сессии."""

    articles: IArticleRepository
    profiles: IProfileRepository
    bookmarks: IBookmarkRepository
    categories: ICategoryRepository


RepositoryScope = Callable[[], AsyncContextManager[Repositories]]


@dataclass
class Feed:
    articles: List[Article]
    categories: List[str]
    profile: Optional[Profile] = None
    bookmarked_ids: List[UUID] = field(default_factory=list)


class FeedService:

    def __init__(self, scope: RepositoryScope):
        self.scope = scope

    async def _articles(self, category: Optional[str]) -> List[Article]:
        async with self.scope() as repos:
            return await repos.articles.find_published(category=category)

    async def _categories(self) -> List[str]:
        async with self.scope() as repos:
            return await repos.categories.list_names()

    async def _profile(self, viewer_id: Optional[UUID]) -> Optional[Profile]:
        if viewer_id is None:
            return None
        async with self.scope() as repos:
            return await repos.profiles.find_by_id(viewer_id)

    async def _bookmarked_ids(self, viewer_id: Optional[UUID]) -> List[UUID]:
        if viewer_id is None:
            return []
        async with self.scope() as repos:
            return [b.article_id for b in await repos.bookmarks.list_for_user(viewer_id)]

    async def build(self, viewer_id: Optional[UUID] = None, category: Optional[str] = None) -> Feed:
        """Опубликованные статьи, профиль, закладки и категории одним ответом."""
        articles, profile, bookmarked_ids, categories = await asyncio.gather(
            self._articles(category),
            self._profile(viewer_id),
            self._bookmarked_ids(viewer_id),
            self._categories(),
        )
        logger.debug(f"[Feed] {len(articles)} articles, viewer={viewer_id}")
        return Feed(
            articles=articles,
            categories=categories,
            profile=profile,
            bookmarked_ids=bookmarked_ids,
        )
