"""
Общие фикстуры тестов: in-memory репозитории и TestClient.
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Sequence
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from newsgrid.application.handlers.article_command_handler import ArticleCommandHandler
from newsgrid.application.services.article_service import ArticleService
from newsgrid.application.services.feed_service import Repositories
from newsgrid.domain.entities.article import Article
from newsgrid.domain.entities.bookmark import Bookmark
from newsgrid.domain.entities.category import Category
from newsgrid.domain.entities.profile import Profile
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.repositories.bookmark_repository import IBookmarkRepository
from newsgrid.domain.repositories.category_repository import ICategoryRepository
from newsgrid.domain.repositories.user_repository import IProfileRepository, IUserRoleRepository
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.domain.value_objects.source import Source
from newsgrid.infrastructure.auth.supabase_auth import AuthUser
from newsgrid.shared.exceptions.domain_exceptions import DuplicateEntityError, EntityNotFoundError
from newsgrid.shared.exceptions.infrastructure_exceptions import AuthProviderError


# =============================================================================
# In-memory репозитории
# =============================================================================

class InMemoryArticleRepository(IArticleRepository):

    def __init__(self, profiles: Optional["InMemoryProfileRepository"] = None):
        self.items: Dict[UUID, Article] = {}
        self.profiles = profiles

    def _author(self, article: Article) -> Article:
        if self.profiles and article.author_id in self.profiles.items:
            full_name = self.profiles.items[article.author_id].full_name
            if full_name:
                article.author_full_name = full_name
        return article

    async def add(self, article: Article) -> Article:
        if any(a.slug == article.slug for a in self.items.values()):
            raise DuplicateEntityError("An article with a similar headline already exists.")
        self.items[article.id] = article
        return self._author(article)

    async def update(self, article: Article) -> Article:
        if article.id not in self.items:
            raise EntityNotFoundError(f"Article {article.id} not found")
        self.items[article.id] = article
        return self._author(article)

    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        return self.items.get(article_id)

    async def find_by_slug(self, slug: str) -> Optional[Article]:
        return next((a for a in self.items.values() if a.slug == slug), None)

    async def find_by_ids(self, article_ids: Sequence[UUID]) -> List[Article]:
        return [self.items[i] for i in article_ids if i in self.items]

    async def slugs_starting_with(self, prefix: str) -> List[str]:
        return [a.slug for a in self.items.values() if a.slug.startswith(prefix)]

    async def find_published(
        self,
        category: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[Article]:
        articles = [a for a in self.items.values() if a.status is ArticleStatus.PUBLISHED]
        if category:
            articles = [a for a in articles if a.category.lower() == category.lower()]
        articles.sort(key=lambda a: a.created_at, reverse=True)
        return articles[offset:offset + limit]

    async def search_published(self, query: str, limit: int = 50) -> List[Article]:
        published = await self.find_published()
        return [a for a in published if query.lower() in a.headline.lower()][:limit]

    async def find_by_author(
        self,
        author_id: UUID,
        status: Optional[ArticleStatus] = None
    ) -> List[Article]:
        articles = [a for a in self.items.values() if a.author_id == author_id]
        if status:
            articles = [a for a in articles if a.status is status]
        return sorted(articles, key=lambda a: a.created_at, reverse=True)

    async def find_by_status(self, status: ArticleStatus, oldest_first: bool = True) -> List[Article]:
        articles = [a for a in self.items.values() if a.status is status]
        return sorted(articles, key=lambda a: a.created_at, reverse=not oldest_first)

    async def delete(self, article_id: UUID) -> bool:
        return self.items.pop(article_id, None) is not None


class InMemoryProfileRepository(IProfileRepository):

    def __init__(self):
        self.items: Dict[UUID, Profile] = {}

    async def find_by_id(self, user_id: UUID) -> Optional[Profile]:
        return self.items.get(user_id)

    async def update(self, profile: Profile) -> Profile:
        self.items[profile.id] = profile
        return profile


class InMemoryUserRoleRepository(IUserRoleRepository):

    def __init__(self):
        self.roles = set()

    async def has_role(self, user_id: UUID, role: str) -> bool:
        return (user_id, role) in self.roles

    async def grant(self, user_id: UUID, role: str) -> None:
        self.roles.add((user_id, role))


class InMemoryBookmarkRepository(IBookmarkRepository):

    def __init__(self):
        self.items: List[Bookmark] = []

    async def add(self, bookmark: Bookmark) -> Bookmark:
        if not await self.exists(bookmark.user_id, bookmark.article_id):
            self.items.append(bookmark)
        return bookmark

    async def remove(self, user_id: UUID, article_id: UUID) -> bool:
        before = len(self.items)
        self.items = [
            b for b in self.items if not (b.user_id == user_id and b.article_id == article_id)
        ]
        return len(self.items) < before

    async def exists(self, user_id: UUID, article_id: UUID) -> bool:
        return any(b.user_id == user_id and b.article_id == article_id for b in self.items)

    async def list_for_user(self, user_id: UUID) -> List[Bookmark]:
        bookmarks = [b for b in self.items if b.user_id == user_id]
        return sorted(bookmarks, key=lambda b: b.created_at, reverse=True)


class InMemoryCategoryRepository(ICategoryRepository):

    def __init__(self, names: Sequence[str] = ()):
        self.names = set(names)

    async def list_names(self) -> List[str]:
        return sorted(self.names)

    async def add(self, category: Category) -> Category:
        self.names.add(category.category)
        return category


class FakeAuthClient:
    """Токен -> пользователь; неизвестный токен отклоняется как у провайдера."""

    def __init__(self):
        self.tokens: Dict[str, AuthUser] = {}

    def register(self, token: str, user_id: Optional[UUID] = None) -> AuthUser:
        user = AuthUser(id=user_id or uuid4(), email=f"{token}@example.com")
        self.tokens[token] = user
        return user

    async def get_user(self, token: str) -> AuthUser:
        if token not in self.tokens:
            raise AuthProviderError("Auth provider returned HTTP 401")
        return self.tokens[token]


# =============================================================================
# Фабрики
# =============================================================================

def make_article(**overrides) -> Article:
    """Опубликованная Reporting/Rumor статья по умолчанию."""
    data = dict(
        author_id=uuid4(),
        headline="City council approves new park",
        content="The city council voted on Tuesday to approve a new park downtown.",
        category="Local",
        article_type=ArticleType.REPORTING_RUMOR,
        status=ArticleStatus.PUBLISHED,
    )
    data.update(overrides)
    article = Article(**data)
    if not article.slug:
        article.slug = f"article-{article.id.hex[:8]}"
    return article


def url_source(url: str = "https://example.com/report") -> Source:
    return Source(type="url", value=url)


# =============================================================================
# Фикстуры
# =============================================================================

@pytest.fixture
def profiles():
    return InMemoryProfileRepository()


@pytest.fixture
def articles(profiles):
    return InMemoryArticleRepository(profiles)


@pytest.fixture
def roles():
    return InMemoryUserRoleRepository()


@pytest.fixture
def bookmarks():
    return InMemoryBookmarkRepository()


@pytest.fixture
def categories():
    return InMemoryCategoryRepository(["Politics", "Local", "Science"])


@pytest.fixture
def article_service(articles):
    return ArticleService(articles, ArticleCommandHandler(articles))


@pytest.fixture
def auth_client():
    return FakeAuthClient()


@pytest.fixture
def verification_runs():
    """Статьи, для которых запускалась фоновая проверка."""
    return []


@pytest.fixture
def client(articles, profiles, roles, bookmarks, categories, auth_client, verification_runs):
    from newsgrid.api import dependencies
    from newsgrid.main import app

    @asynccontextmanager
    async def scope():
        yield Repositories(
            articles=articles,
            profiles=profiles,
            bookmarks=bookmarks,
            categories=categories,
        )

    async def runner(article_id: UUID) -> None:
        verification_runs.append(article_id)

    app.dependency_overrides = {
        dependencies.get_article_repository: lambda: articles,
        dependencies.get_profile_repository: lambda: profiles,
        dependencies.get_role_repository: lambda: roles,
        dependencies.get_bookmark_repository: lambda: bookmarks,
        dependencies.get_category_repository: lambda: categories,
        dependencies.get_repository_scope: lambda: scope,
        dependencies.get_auth_client: lambda: auth_client,
        dependencies.get_verification_runner: lambda: runner,
    }
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture
def user(auth_client, profiles):
    """Обычный пользователь с профилем."""
    authed = auth_client.register("user-token")
    profiles.items[authed.id] = Profile(id=authed.id, first_name="Ada", last_name="Lovelace")
    return authed


@pytest.fixture
def admin_user(auth_client, roles):
    authed = auth_client.register("admin-token")
    roles.roles.add((authed.id, "admin"))
    return authed


USER_HEADERS = {"Authorization": "Bearer user-token"}
ADMIN_HEADERS = {"Authorization": "Bearer admin-token"}
