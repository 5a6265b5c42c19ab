"""
PostgreSQL репозиторий категорий.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsgrid.domain.entities.category import Category
from newsgrid.domain.repositories.category_repository import ICategoryRepository
from newsgrid.infrastructure.persistence.models import CategoryModel
from newsgrid.shared.exceptions.domain_exceptions import DuplicateEntityError


class CategoryRepositoryImpl(ICategoryRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_names(self) -> List[str]:
        result = await self.session.execute(
            select(CategoryModel.category).distinct().order_by(CategoryModel.category)
        )
        return [name for name in result.scalars().all() if name]

    async def add(self, category: Category) -> Category:
        model = CategoryModel(category=category.category)
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEntityError(f"Category '{category.category}' already exists") from e
        return Category(category=model.category, id=model.id)
