"""
Repository Interface: категории.
"""

from abc import ABC, abstractmethod
from typing import List

from newsgrid.domain.entities.category import Category


class ICategoryRepository(ABC):

    @abstractmethod
    async def list_names(self) -> List[str]:
        """Уникальные названия категорий по алфавиту."""
        pass

    @abstractmethod
    async def add(self, category: Category) -> Category:
        """
        Raises:
            DuplicateEntityError: Если категория уже есть
        """
        pass
