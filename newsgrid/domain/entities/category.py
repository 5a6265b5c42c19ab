"""Справочник категорий для формы отправки."""

from dataclasses import dataclass
from typing import Optional

from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError


@dataclass
class Category:
    category: str
    id: Optional[int] = None

    def __post_init__(self):
        if not self.category or not self.category.strip():
            raise DomainValidationError("Category name cannot be empty")
        self.category = self.category.strip()
