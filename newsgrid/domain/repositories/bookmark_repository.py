"""
Repository Interface: закладки.
"""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from newsgrid.domain.entities.bookmark import Bookmark


class IBookmarkRepository(ABC):

    @abstractmethod
    async def add(self, bookmark: Bookmark) -> Bookmark:
        pass

    @abstractmethod
    async def remove(self, user_id: UUID, article_id: UUID) -> bool:
        pass

    @abstractmethod
    async def exists(self, user_id: UUID, article_id: UUID) -> bool:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> List[Bookmark]:
        """Закладки пользователя, новые первыми."""
        pass
