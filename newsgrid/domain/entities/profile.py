"""
Доменные сущности пользователя: профиль и роль.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError

ADMIN_ROLE = "admin"


@dataclass
class Profile:
    """Профиль автора. id совпадает с id пользователя у провайдера аутентификации."""

    id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        parts = [p.strip() for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts)

    def rename(self, first_name: str, last_name: str) -> None:
        """Обновить имя. Оба поля обязательны."""
        if not isinstance(first_name, str) or not isinstance(last_name, str):
            raise DomainValidationError("First name and last name are required and must be valid strings.")
        if not first_name.strip() or not last_name.strip():
            raise DomainValidationError("First name and last name are required and must be valid strings.")
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
