"""Профили, категории и закладки."""

import logging
from typing import List
from uuid import UUID

from newsgrid.domain.entities.article import Article
from newsgrid.domain.entities.bookmark import Bookmark
from newsgrid.domain.entities.category import Category
from newsgrid.domain.entities.profile import Profile
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.repositories.bookmark_repository import IBookmarkRepository
from newsgrid.domain.repositories.category_repository import ICategoryRepository
from newsgrid.domain.repositories.user_repository import IProfileRepository
from newsgrid.shared.exceptions.domain_exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(self, profiles: IProfileRepository):
        self.profiles = profiles

    async def get(self, user_id: UUID) -> Profile:
        profile = await self.profiles.find_by_id(user_id)
        if profile is None:
            raise EntityNotFoundError("Profile not found.")
        return profile

    async def update_name(self, user_id: UUID, first_name: str, last_name: str) -> Profile:
        """Обновить имя; full_name выводится из частей."""
        profile = await self.get(user_id)
        profile.rename(first_name, last_name)
        return await self.profiles.update(profile)


class CategoryService:

    def __init__(self, categories: ICategoryRepository):
        self.categories = categories

    async def list_categories(self) -> List[str]:
        return await self.categories.list_names()

    async def add(self, name: str) -> Category:
        return await self.categories.add(Category(category=name))


class BookmarkService:
    """Закладки на статьи, видимые пользователю."""

    def __init__(self, bookmarks: IBookmarkRepository, articles: IArticleRepository):
        self.bookmarks = bookmarks
        self.articles = articles

    async def add(self, user_id: UUID, article_id: UUID) -> None:
        article = await self.articles.find_by_id(article_id)
        if article is None or not article.is_visible_to(user_id):
            raise EntityNotFoundError("Article not found.")
        if await self.bookmarks.exists(user_id, article_id):
            return
        await self.bookmarks.add(Bookmark(user_id=user_id, article_id=article_id))

    async def remove(self, user_id: UUID, article_id: UUID) -> bool:
        return await self.bookmarks.remove(user_id, article_id)

    async def is_bookmarked(self, user_id: UUID, article_id: UUID) -> bool:
        return await self.bookmarks.exists(user_id, article_id)

    async def list_articles(self, user_id: UUID) -> List[Article]:
        """Статьи из закладок, последняя закладка первой."""
        bookmarks = await self.bookmarks.list_for_user(user_id)
        articles = await self.articles.find_by_ids([b.article_id for b in bookmarks])
        by_id = {a.id: a for a in articles if a.is_visible_to(user_id)}
        return [by_id[b.article_id] for b in bookmarks if b.article_id in by_id]
