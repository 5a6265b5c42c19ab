"""
Repository Interfaces: профили и роли пользователей.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from newsgrid.domain.entities.profile import Profile


class IProfileRepository(ABC):
    """Профили авторов."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[Profile]:
        pass

    @abstractmethod
    async def update(self, profile: Profile) -> Profile:
        """
        Сохранить имя профиля.

        Raises:
            EntityNotFoundError: Если профиля нет
        """
        pass


class IUserRoleRepository(ABC):
    """Таблица членства в ролях."""

    @abstractmethod
    async def has_role(self, user_id: UUID, role: str) -> bool:
        pass

    @abstractmethod
    async def grant(self, user_id: UUID, role: str) -> None:
        """Выдать роль. Повторная выдача ничего не меняет."""
        pass
