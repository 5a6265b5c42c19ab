"""
Pydantic schemas для API статей.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from newsgrid.domain.entities.article import Article
from newsgrid.domain.value_objects.source import Source


class SourceSchema(BaseModel):
    """Источник: ссылка или текст PDF."""

    type: str = "url"
    value: str
    name: Optional[str] = None
    status: Optional[str] = None
    reason: Optional[str] = None

    def to_entity(self) -> Source:
        return Source(
            type=self.type,
            value=self.value,
            name=self.name,
            status=self.status,
            reason=self.reason,
        )

    @classmethod
    def from_entity(cls, source: Source) -> "SourceSchema":
        return cls(
            type=source.type.value,
            value=source.value,
            name=source.name,
            status=source.status,
            reason=source.reason,
        )


class SubmitArticleRequest(BaseModel):
    """
    Запрос на отправку статьи.

    Обязательность полей проверяет домен, чтобы ответ был 400 с
    единым сообщением.
    """

    headline: Optional[str] = Field(default=None, max_length=500)
    content: Optional[str] = None
    category: Optional[str] = None
    article_type: Optional[str] = None
    sources: List[SourceSchema] = []
    save_as_draft: bool = False


class UpdateDraftRequest(BaseModel):
    headline: Optional[str] = Field(default=None, max_length=500)
    content: Optional[str] = None
    category: Optional[str] = None
    article_type: Optional[str] = None
    sources: Optional[List[SourceSchema]] = None


class StatusUpdateRequest(BaseModel):
    status: str


class ArticleResponse(BaseModel):
    """Ответ со статьёй."""

    id: UUID
    slug: str
    headline: str
    content: str
    excerpt: str
    category: str
    article_type: str
    sources: List[SourceSchema]
    status: str
    trust_score: Optional[int]
    analysis_result: Dict[str, Any]
    author_id: Optional[UUID]
    author_full_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: Article) -> "ArticleResponse":
        """Создать из entity."""
        return cls(
            id=entity.id,
            slug=entity.slug,
            headline=entity.headline,
            content=entity.content,
            excerpt=entity.excerpt,
            category=entity.category,
            article_type=entity.article_type.value,
            sources=[SourceSchema.from_entity(s) for s in entity.sources],
            status=entity.status.value,
            trust_score=entity.trust_score,
            analysis_result=entity.analysis_result or {},
            author_id=entity.author_id,
            author_full_name=entity.author_full_name,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    class Config:
        from_attributes = True


class ArticleCardResponse(BaseModel):
    """Карточка статьи для лент: без текста и отчётов."""

    id: UUID
    slug: str
    headline: str
    excerpt: str
    category: str
    article_type: str
    status: str
    trust_score: Optional[int]
    author_id: Optional[UUID]
    author_full_name: str
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: Article) -> "ArticleCardResponse":
        return cls(
            id=entity.id,
            slug=entity.slug,
            headline=entity.headline,
            excerpt=entity.excerpt,
            category=entity.category,
            article_type=entity.article_type.value,
            status=entity.status.value,
            trust_score=entity.trust_score,
            author_id=entity.author_id,
            author_full_name=entity.author_full_name,
            created_at=entity.created_at,
        )


class SubmissionResponse(BaseModel):
    message: str
    trigger_ai: bool
    article: ArticleResponse
