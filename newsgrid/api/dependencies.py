"""
FastAPI Dependencies для DI.
"""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Awaitable, Callable, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from newsgrid.application.handlers.article_command_handler import ArticleCommandHandler
from newsgrid.application.services.admin_service import AdminService
from newsgrid.application.services.article_service import ArticleService
from newsgrid.application.services.feed_service import FeedService, Repositories, RepositoryScope
from newsgrid.application.services.profile_service import BookmarkService, CategoryService, ProfileService
from newsgrid.application.verification.verification_service import VerificationService
from newsgrid.domain.repositories.article_repository import IArticleRepository
from newsgrid.domain.repositories.bookmark_repository import IBookmarkRepository
from newsgrid.domain.repositories.category_repository import ICategoryRepository
from newsgrid.domain.repositories.user_repository import IProfileRepository, IUserRoleRepository
from newsgrid.infrastructure.auth.supabase_auth import AuthUser, SupabaseAuthClient
from newsgrid.infrastructure.config.database import AsyncSessionLocal, get_db_session
from newsgrid.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
from newsgrid.infrastructure.persistence.bookmark_repository_impl import BookmarkRepositoryImpl
from newsgrid.infrastructure.persistence.category_repository_impl import CategoryRepositoryImpl
from newsgrid.infrastructure.persistence.user_repository_impl import (
    ProfileRepositoryImpl,
    UserRoleRepositoryImpl,
)
from newsgrid.infrastructure.web.page_title import PageTitleFetcher
from newsgrid.infrastructure.web.url_checker import UrlChecker
from newsgrid.shared.exceptions.domain_exceptions import (
    AuthenticationRequired,
    DomainException,
    PermissionDenied,
)
from newsgrid.shared.exceptions.infrastructure_exceptions import (
    AuthProviderError,
    InfrastructureException,
)

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

VerificationRunner = Callable[[UUID], Awaitable[None]]


# =============================================================================
# Repositories
# =============================================================================

async def get_article_repository(
    session: AsyncSession = Depends(get_db_session)
) -> IArticleRepository:
    """DI для repository."""
    return ArticleRepositoryImpl(session)


async def get_profile_repository(
    session: AsyncSession = Depends(get_db_session)
) -> IProfileRepository:
    return ProfileRepositoryImpl(session)


async def get_role_repository(
    session: AsyncSession = Depends(get_db_session)
) -> IUserRoleRepository:
    return UserRoleRepositoryImpl(session)


async def get_bookmark_repository(
    session: AsyncSession = Depends(get_db_session)
) -> IBookmarkRepository:
    return BookmarkRepositoryImpl(session)


async def get_category_repository(
    session: AsyncSession = Depends(get_db_session)
) -> ICategoryRepository:
    return CategoryRepositoryImpl(session)


@asynccontextmanager
async def repository_scope() -> AsyncIterator[Repositories]:
    """Набор репозиториев в отдельной сессии."""
    async with AsyncSessionLocal() as session:
        yield Repositories(
            articles=ArticleRepositoryImpl(session),
            profiles=ProfileRepositoryImpl(session),
            bookmarks=BookmarkRepositoryImpl(session),
            categories=CategoryRepositoryImpl(session),
        )


def get_repository_scope() -> RepositoryScope:
    return repository_scope


# =============================================================================
# Services
# =============================================================================

async def get_article_service(
    repository: IArticleRepository = Depends(get_article_repository)
) -> ArticleService:
    """DI для service."""
    command_handler = ArticleCommandHandler(repository)
    return ArticleService(repository, command_handler)


async def get_admin_service(
    articles: IArticleRepository = Depends(get_article_repository),
    roles: IUserRoleRepository = Depends(get_role_repository)
) -> AdminService:
    return AdminService(articles, roles)


async def get_profile_service(
    profiles: IProfileRepository = Depends(get_profile_repository)
) -> ProfileService:
    return ProfileService(profiles)


async def get_category_service(
    categories: ICategoryRepository = Depends(get_category_repository)
) -> CategoryService:
    return CategoryService(categories)


async def get_bookmark_service(
    bookmarks: IBookmarkRepository = Depends(get_bookmark_repository),
    articles: IArticleRepository = Depends(get_article_repository)
) -> BookmarkService:
    return BookmarkService(bookmarks, articles)


async def get_feed_service(
    scope: RepositoryScope = Depends(get_repository_scope)
) -> FeedService:
    return FeedService(scope)


async def get_verification_service(
    articles: IArticleRepository = Depends(get_article_repository)
) -> VerificationService:
    return VerificationService(articles)


def get_url_checker() -> UrlChecker:
    return UrlChecker()


def get_page_title_fetcher() -> PageTitleFetcher:
    return PageTitleFetcher()


# =============================================================================
# Фоновая AI проверка
# =============================================================================

async def run_article_verification(article_id: UUID) -> None:
    """
    Проверка статьи после отправки.

    Запускается как BackgroundTask после ответа, поэтому открывает свою
    сессию и только логирует ошибки.
    """
    async with AsyncSessionLocal() as session:
        service = VerificationService(ArticleRepositoryImpl(session))
        try:
            outcome = await service.verify_article(article_id)
        except (DomainException, InfrastructureException) as e:
            logger.error(f"[Verify] background verification of {article_id} failed: {e}")
            return
    logger.info(f"[Verify] {article_id} finished with status {outcome.status.value}")


def get_verification_runner() -> VerificationRunner:
    return run_article_verification


# =============================================================================
# Auth
# =============================================================================

@lru_cache()
def get_auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient()


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client)
) -> Optional[AuthUser]:
    """Пользователь по Bearer токену или None для анонима и невалидного токена."""
    if credentials is None:
        return None
    try:
        return await auth_client.get_user(credentials.credentials)
    except AuthProviderError as e:
        logger.warning(f"Ignoring invalid token on public route: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client)
) -> AuthUser:
    """
    Обязательная аутентификация.

    Raises:
        AuthenticationRequired: Нет токена
        AuthProviderError: Токен отклонён провайдером
    """
    if credentials is None:
        raise AuthenticationRequired("Unauthorized")
    return await auth_client.get_user(credentials.credentials)


async def require_admin(
    user: AuthUser = Depends(get_current_user),
    admin_service: AdminService = Depends(get_admin_service)
) -> AuthUser:
    if not await admin_service.is_admin(user.id):
        logger.warning(f"Non-admin {user.id} tried to access admin route")
        raise PermissionDenied("Forbidden: Admins only.")
    return user
