"""
PostgreSQL репозитории профилей и ролей.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from newsgrid.domain.entities.profile import Profile
from newsgrid.domain.repositories.user_repository import IProfileRepository, IUserRoleRepository
from newsgrid.infrastructure.persistence.models import ProfileModel, UserRoleModel
from newsgrid.shared.exceptions.domain_exceptions import EntityNotFoundError


class ProfileRepositoryImpl(IProfileRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: UUID) -> Optional[Profile]:
        model = await self.session.get(ProfileModel, user_id)
        if model is None:
            return None
        return Profile(id=model.id, first_name=model.first_name, last_name=model.last_name)

    async def update(self, profile: Profile) -> Profile:
        model = await self.session.get(ProfileModel, profile.id)
        if model is None:
            raise EntityNotFoundError("Profile not found.")
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        await self.session.commit()
        return profile


class UserRoleRepositoryImpl(IUserRoleRepository):
    """Проверка членства в user_roles."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def has_role(self, user_id: UUID, role: str) -> bool:
        result = await self.session.execute(
            select(UserRoleModel.role)
            .where(UserRoleModel.user_id == user_id)
            .where(UserRoleModel.role == role)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def grant(self, user_id: UUID, role: str) -> None:
        await self.session.execute(
            insert(UserRoleModel)
            .values(user_id=user_id, role=role)
            .on_conflict_do_nothing()
        )
        await self.session.commit()
