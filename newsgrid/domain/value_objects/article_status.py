"""
Value Object: ArticleStatus

Статус публикации статьи.
"""

from enum import Enum
from typing import FrozenSet

from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError


class ArticleStatus(str, Enum):
    """Статусы жизненного цикла статьи."""

    DRAFT = "draft"                                      # Черновик автора
    PENDING_REVIEW = "pending_review"                    # Снята с публикации / ручная проверка
    PENDING_AI_VERIFICATION = "Pending AI Verification"  # Factual, ждёт AI
    PUBLISHED = "Published"                              # Опубликована
    REJECTED = "Rejected"                                # Отклонена администратором
    REJECTED_AI = "Rejected - AI"                        # Отклонена AI проверкой

    @property
    def is_public(self) -> bool:
        """Видна ли статья всем пользователям."""
        return self is ArticleStatus.PUBLISHED

    @classmethod
    def owner_toggle_targets(cls) -> FrozenSet['ArticleStatus']:
        """Статусы, которые автор может выставить сам."""
        return frozenset({cls.PUBLISHED, cls.PENDING_REVIEW})

    @classmethod
    def admin_override_targets(cls) -> FrozenSet['ArticleStatus']:
        """Статусы, которые может выставить администратор."""
        return frozenset({cls.PUBLISHED, cls.REJECTED, cls.PENDING_REVIEW})

    def can_transition_to(self, new_status: 'ArticleStatus') -> bool:
        """
        Проверка возможности перехода в новый статус.

        Правила переходов:
        - DRAFT -> PENDING_AI_VERIFICATION, PUBLISHED, PENDING_REVIEW (отправка черновика)
        - PENDING_AI_VERIFICATION -> PUBLISHED, REJECTED_AI (результат AI)
        - PUBLISHED <-> PENDING_REVIEW (автор)

        Административные переопределения проверяются отдельно,
        см. can_be_overridden_to().
        """
        transitions = {
            ArticleStatus.DRAFT: [
                ArticleStatus.PENDING_AI_VERIFICATION,
                ArticleStatus.PUBLISHED,
                ArticleStatus.PENDING_REVIEW,
            ],
            ArticleStatus.PENDING_AI_VERIFICATION: [
                ArticleStatus.PUBLISHED,
                ArticleStatus.REJECTED_AI,
            ],
            ArticleStatus.PUBLISHED: [ArticleStatus.PENDING_REVIEW],
            ArticleStatus.PENDING_REVIEW: [ArticleStatus.PUBLISHED],
        }

        allowed = transitions.get(self, [])
        return new_status in allowed

    def can_be_overridden_to(self, new_status: 'ArticleStatus') -> bool:
        """Администратор может менять статус любой отправленной статьи."""
        if self is ArticleStatus.DRAFT:
            return False
        return new_status in self.admin_override_targets()

    @classmethod
    def parse(cls, value: str) -> 'ArticleStatus':
        try:
            return cls(value)
        except ValueError:
            raise DomainValidationError(f"Invalid status: {value}")
