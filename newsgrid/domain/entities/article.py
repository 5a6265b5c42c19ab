# -*- coding: utf-8 -*-
"""
Доменная сущность: Статья (Article)

Статья проходит один из двух треков:
- Factual: обязательные источники и AI проверка перед публикацией
- Reporting/Rumor: публикуется сразу
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.domain.value_objects.source import Source
from newsgrid.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    InvalidStatusTransition,
)

EXCERPT_LENGTH = 150
UNKNOWN_AUTHOR = "Unknown Author"


def build_excerpt(content: str) -> str:
    """Первые 150 символов контента, с многоточием если текст длиннее."""
    if len(content) > EXCERPT_LENGTH:
        return content[:EXCERPT_LENGTH] + "..."
    return content


@dataclass
class Article:
    """
    Доменная сущность статьи.

    Инварианты:
    - Статья всегда имеет уникальный ID
    - Заголовок не может быть пустым (max 500 символов)
    - trust_score: 0-100 или None
    - Factual статья вне черновика имеет хотя бы один источник
    """

    # =========================================================================
    # Идентификация
    # =========================================================================
    id: UUID = field(default_factory=uuid4)
    author_id: Optional[UUID] = None
    slug: str = ""

    # =========================================================================
    # Основные атрибуты
    # =========================================================================
    headline: str = field(default="")
    content: str = field(default="")
    excerpt: str = field(default="")
    category: str = field(default="")
    article_type: ArticleType = ArticleType.REPORTING_RUMOR
    sources: List[Source] = field(default_factory=list)

    # =========================================================================
    # Статус и результаты AI
    # =========================================================================
    status: ArticleStatus = ArticleStatus.DRAFT
    trust_score: Optional[int] = None
    analysis_result: Dict[str, Any] = field(default_factory=dict)

    # =========================================================================
    # Метаданные
    # =========================================================================
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    author_full_name: str = UNKNOWN_AUTHOR

    def __post_init__(self):
        """Валидация инвариантов после инициализации."""
        if not self.excerpt and self.content:
            self.excerpt = build_excerpt(self.content)
        self.validate()

    def validate(self) -> None:
        """
        Проверка инвариантов сущности.

        Исключения:
            DomainValidationError: Если инварианты нарушены
        """
        if not self.headline or len(self.headline.strip()) == 0:
            raise DomainValidationError("Article headline cannot be empty")

        if len(self.headline) > 500:
            raise DomainValidationError("Article headline too long (max 500 chars)")

        if self.trust_score is not None and not 0 <= self.trust_score <= 100:
            raise DomainValidationError("Trust score must be between 0 and 100")

        if self.status is not ArticleStatus.DRAFT:
            self.ensure_submittable()

    def ensure_submittable(self) -> None:
        """Проверка перед отправкой: контент, категория и источники для Factual."""
        if not self.content or not self.content.strip():
            raise DomainValidationError("Article content cannot be empty")
        if not self.category or not self.category.strip():
            raise DomainValidationError("Article category is required")
        if self.article_type.requires_sources and not self.sources:
            raise DomainValidationError("Sources are mandatory for factual articles.")

    # =========================================================================
    # Видимость и владение
    # =========================================================================

    def is_owned_by(self, user_id: Optional[UUID]) -> bool:
        return user_id is not None and self.author_id == user_id

    def is_visible_to(self, user_id: Optional[UUID]) -> bool:
        """Опубликованные статьи видны всем, остальные только автору."""
        return self.status.is_public or self.is_owned_by(user_id)

    # =========================================================================
    # Бизнес-логика статусов
    # =========================================================================

    def initial_submission_status(self) -> ArticleStatus:
        """Статус при отправке: Factual ждёт AI, Reporting/Rumor публикуется."""
        if self.article_type.requires_ai_verification:
            return ArticleStatus.PENDING_AI_VERIFICATION
        return ArticleStatus.PUBLISHED

    def submit(self) -> ArticleStatus:
        """Отправить черновик. Возвращает новый статус."""
        self.ensure_submittable()
        self.transition_to(self.initial_submission_status())
        return self.status

    def transition_to(self, new_status: ArticleStatus) -> None:
        """Переход статуса по правилам жизненного цикла."""
        if not self.status.can_transition_to(new_status):
            raise InvalidStatusTransition(self.status.value, new_status.value)
        self.status = new_status
        self.updated_at = datetime.utcnow()

    def override_status(self, new_status: ArticleStatus) -> None:
        """Административное переопределение статуса."""
        if not self.status.can_be_overridden_to(new_status):
            raise InvalidStatusTransition(self.status.value, new_status.value)
        self.status = new_status
        self.updated_at = datetime.utcnow()

    def apply_ai_verdict(self, score: Optional[int], threshold: int) -> ArticleStatus:
        """
        Применить результат AI проверки.

        Без оценки статус не меняется. Оценка >= threshold публикует статью,
        иначе статья отклоняется AI.
        """
        if score is None:
            return self.status
        self.set_trust_score(score)
        if score >= threshold:
            self.transition_to(ArticleStatus.PUBLISHED)
        else:
            self.transition_to(ArticleStatus.REJECTED_AI)
        return self.status

    def set_trust_score(self, score: int) -> None:
        if not 0 <= score <= 100:
            raise DomainValidationError(f"Invalid trust score: {score}")
        self.trust_score = score
        self.updated_at = datetime.utcnow()

    def merge_analysis(self, **reports: Any) -> None:
        """Добавить отчёты к analysis_result, сохранив существующие."""
        merged = dict(self.analysis_result or {})
        merged.update(reports)
        self.analysis_result = merged
        self.updated_at = datetime.utcnow()

    def edit(
        self,
        headline: Optional[str] = None,
        content: Optional[str] = None,
        category: Optional[str] = None,
        article_type: Optional[ArticleType] = None,
        sources: Optional[List[Source]] = None,
    ) -> None:
        """Редактирование черновика."""
        if self.status is not ArticleStatus.DRAFT:
            raise InvalidStatusTransition(self.status.value, ArticleStatus.DRAFT.value)
        if headline is not None:
            self.headline = headline
        if content is not None:
            self.content = content
            self.excerpt = build_excerpt(content)
        if category is not None:
            self.category = category
        if article_type is not None:
            self.article_type = article_type
        if sources is not None:
            self.sources = list(sources)
        self.updated_at = datetime.utcnow()
        self.validate()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Article(id={self.id}, headline='{self.headline[:50]}...', status={self.status.value})"
