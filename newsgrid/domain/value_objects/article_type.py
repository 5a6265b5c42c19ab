"""
Value Object: ArticleType

Трек публикации статьи.
"""

from enum import Enum

from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError


class ArticleType(str, Enum):
    """Тип статьи определяет путь до публикации."""

    FACTUAL = "Factual"
    REPORTING_RUMOR = "Reporting/Rumor"

    @property
    def requires_sources(self) -> bool:
        """Нужны ли источники для отправки."""
        return self is ArticleType.FACTUAL

    @property
    def requires_ai_verification(self) -> bool:
        """Проходит ли статья AI проверку перед публикацией."""
        return self is ArticleType.FACTUAL

    @classmethod
    def parse(cls, value: str) -> 'ArticleType':
        """Строка из запроса → ArticleType."""
        try:
            return cls(value)
        except ValueError:
            raise DomainValidationError("Invalid article_type.")
