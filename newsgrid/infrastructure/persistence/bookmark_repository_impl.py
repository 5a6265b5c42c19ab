"""
PostgreSQL репозиторий закладок.
"""

from typing import List
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from newsgrid.domain.entities.bookmark import Bookmark
from newsgrid.domain.repositories.bookmark_repository import IBookmarkRepository
from newsgrid.infrastructure.persistence.models import BookmarkModel


class BookmarkRepositoryImpl(IBookmarkRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, bookmark: Bookmark) -> Bookmark:
        """Добавить закладку; повторное добавление игнорируется."""
        await self.session.execute(
            insert(BookmarkModel)
            .values(
                id=bookmark.id,
                user_id=bookmark.user_id,
                article_id=bookmark.article_id,
                created_at=bookmark.created_at,
            )
            .on_conflict_do_nothing(constraint="uq_bookmarks_user_article")
        )
        await self.session.commit()
        return bookmark

    async def remove(self, user_id: UUID, article_id: UUID) -> bool:
        result = await self.session.execute(
            delete(BookmarkModel)
            .where(BookmarkModel.user_id == user_id)
            .where(BookmarkModel.article_id == article_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def exists(self, user_id: UUID, article_id: UUID) -> bool:
        result = await self.session.execute(
            select(func.count(BookmarkModel.id))
            .where(BookmarkModel.user_id == user_id)
            .where(BookmarkModel.article_id == article_id)
        )
        return result.scalar() > 0

    async def list_for_user(self, user_id: UUID) -> List[Bookmark]:
        result = await self.session.execute(
            select(BookmarkModel)
            .where(BookmarkModel.user_id == user_id)
            .order_by(BookmarkModel.created_at.desc())
        )
        return [
            Bookmark(id=m.id, user_id=m.user_id, article_id=m.article_id, created_at=m.created_at)
            for m in result.scalars().all()
        ]
