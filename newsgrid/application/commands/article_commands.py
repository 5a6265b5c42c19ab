"""
CQRS Commands для статей.
"""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.domain.value_objects.source import Source


@dataclass(frozen=True)
class SubmitArticleCommand:
    """
    Команда отправки статьи.

    Иммутабельна (frozen=True) - следует принципу CQRS.
    save_as_draft=True сохраняет черновик без проверки источников.
    """

    # Required
    author_id: UUID
    headline: str
    content: str
    category: str
    article_type: ArticleType

    # Optional
    sources: List[Source] = None
    save_as_draft: bool = False

    def __post_init__(self):
        """Установка значений по умолчанию для изменяемых типов."""
        if self.sources is None:
            object.__setattr__(self, 'sources', [])


@dataclass(frozen=True)
class UpdateDraftCommand:
    """Частичное редактирование черновика: None означает "не менять"."""

    article_id: UUID
    author_id: UUID
    headline: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    article_type: Optional[ArticleType] = None
    sources: Optional[List[Source]] = None
