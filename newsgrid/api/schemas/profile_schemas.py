"""
Pydantic schemas для профиля, закладок и ленты.
"""

from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel

from newsgrid.api.schemas.article_schemas import ArticleCardResponse
from newsgrid.application.services.feed_service import Feed
from newsgrid.domain.entities.profile import Profile


class ProfileResponse(BaseModel):
    id: UUID
    first_name: Optional[str]
    last_name: Optional[str]
    full_name: str

    @classmethod
    def from_entity(cls, entity: Profile) -> "ProfileResponse":
        return cls(
            id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            full_name=entity.full_name,
        )


class UpdateProfileRequest(BaseModel):
    """Оба поля обязательны; проверку делает домен."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None


class BookmarkStatusResponse(BaseModel):
    article_id: UUID
    bookmarked: bool


class FeedResponse(BaseModel):
    """Главная лента одним ответом."""

    articles: List[ArticleCardResponse]
    categories: List[str]
    profile: Optional[ProfileResponse] = None
    bookmarked_ids: List[UUID] = []

    @classmethod
    def from_feed(cls, feed: Feed) -> "FeedResponse":
        return cls(
            articles=[ArticleCardResponse.from_entity(a) for a in feed.articles],
            categories=feed.categories,
            profile=ProfileResponse.from_entity(feed.profile) if feed.profile else None,
            bookmarked_ids=feed.bookmarked_ids,
        )
