"""
FastAPI Routes для статей, черновиков и ленты.
"""

import logging
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, BackgroundTasks, Depends

from newsgrid.api.dependencies import (
    VerificationRunner,
    get_article_service,
    get_current_user,
    get_feed_service,
    get_optional_user,
    get_verification_runner,
)
from newsgrid.api.schemas.article_schemas import (
    ArticleCardResponse,
    ArticleResponse,
    StatusUpdateRequest,
    SubmissionResponse,
    SubmitArticleRequest,
    UpdateDraftRequest,
)
from newsgrid.api.schemas.profile_schemas import FeedResponse
from newsgrid.application.commands.article_commands import SubmitArticleCommand, UpdateDraftCommand
from newsgrid.application.handlers.article_command_handler import SubmissionResult
from newsgrid.application.services.article_service import ArticleService
from newsgrid.application.services.feed_service import FeedService
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.infrastructure.auth.supabase_auth import AuthUser
from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["articles"])

REQUIRED_FIELDS_MESSAGE = "Headline, content, category, and article type are required."


def _respond(
    result: SubmissionResult,
    background_tasks: BackgroundTasks,
    runner: VerificationRunner
) -> SubmissionResponse:
    if result.trigger_ai:
        background_tasks.add_task(runner, result.article.id)
    return SubmissionResponse(
        message=result.message,
        trigger_ai=result.trigger_ai,
        article=ArticleResponse.from_entity(result.article),
    )


# =============================================================================
# Статьи
# =============================================================================

@router.get("/articles", response_model=List[ArticleCardResponse])
async def list_articles(
    category: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    service: ArticleService = Depends(get_article_service)
):
    """Опубликованные статьи, новые первыми."""
    articles = await service.list_published(category=category, limit=limit, offset=offset)
    return [ArticleCardResponse.from_entity(a) for a in articles]


@router.post("/articles", response_model=SubmissionResponse, status_code=201)
async def submit_article(
    request: SubmitArticleRequest,
    background_tasks: BackgroundTasks,
    user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
    runner: VerificationRunner = Depends(get_verification_runner)
):
    """Отправить статью или сохранить черновик."""
    if not request.article_type:
        raise DomainValidationError(REQUIRED_FIELDS_MESSAGE)

    command = SubmitArticleCommand(
        author_id=user.id,
        headline=request.headline or "",
        content=request.content or "",
        category=request.category or "",
        article_type=ArticleType.parse(request.article_type),
        sources=[s.to_entity() for s in request.sources],
        save_as_draft=request.save_as_draft,
    )
    result = await service.submit(command)
    return _respond(result, background_tasks, runner)


@router.get("/articles/{slug}", response_model=ArticleResponse)
async def get_article(
    slug: str,
    user: Optional[AuthUser] = Depends(get_optional_user),
    service: ArticleService = Depends(get_article_service)
):
    """Статья по slug: опубликованная или своя."""
    article = await service.get_by_slug(slug, viewer_id=user.id if user else None)
    return ArticleResponse.from_entity(article)


@router.put("/articles/{slug}", response_model=ArticleResponse)
async def update_article_status(
    slug: str,
    request: StatusUpdateRequest,
    user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service)
):
    """Автор публикует статью или снимает её на доработку."""
    article = await service.set_status_by_owner(slug, user.id, request.status)
    return ArticleResponse.from_entity(article)


@router.delete("/articles/{slug}")
async def delete_article(
    slug: str,
    user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service)
):
    await service.delete_by_owner(slug, user.id)
    return {"message": "Article deleted successfully."}


@router.get("/search", response_model=List[ArticleCardResponse])
async def search_articles(
    q: str = "",
    service: ArticleService = Depends(get_article_service)
):
    articles = await service.search_published(q)
    return [ArticleCardResponse.from_entity(a) for a in articles]


@router.get("/feed", response_model=FeedResponse)
async def home_feed(
    category: Optional[str] = None,
    user: Optional[AuthUser] = Depends(get_optional_user),
    service: FeedService = Depends(get_feed_service)
):
    """Главная лента: статьи, профиль, закладки и категории."""
    feed = await service.build(viewer_id=user.id if user else None, category=category)
    return FeedResponse.from_feed(feed)


@router.get("/users/{user_id}/articles", response_model=List[ArticleCardResponse])
async def list_user_articles(
    user_id: UUID,
    user: Optional[AuthUser] = Depends(get_optional_user),
    service: ArticleService = Depends(get_article_service)
):
    """Статьи автора: все для самого автора, опубликованные для остальных."""
    articles = await service.list_by_author(user_id, viewer_id=user.id if user else None)
    return [ArticleCardResponse.from_entity(a) for a in articles]


# =============================================================================
# Черновики
# =============================================================================

@router.get("/drafts", response_model=List[ArticleResponse])
async def list_drafts(
    user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service)
):
    articles = await service.list_drafts(user.id)
    return [ArticleResponse.from_entity(a) for a in articles]


@router.put("/drafts/{article_id}", response_model=ArticleResponse)
async def update_draft(
    article_id: UUID,
    request: UpdateDraftRequest,
    user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service)
):
    command = UpdateDraftCommand(
        article_id=article_id,
        author_id=user.id,
        headline=request.headline,
        content=request.content,
        category=request.category,
        article_type=ArticleType.parse(request.article_type) if request.article_type else None,
        sources=[s.to_entity() for s in request.sources] if request.sources is not None else None,
    )
    article = await service.update_draft(command)
    return ArticleResponse.from_entity(article)


@router.post("/drafts/{article_id}/submit", response_model=SubmissionResponse)
async def submit_draft(
    article_id: UUID,
    background_tasks: BackgroundTasks,
    user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
    runner: VerificationRunner = Depends(get_verification_runner)
):
    """Отправить черновик по правилам его типа."""
    result = await service.submit_draft(article_id, user.id)
    return _respond(result, background_tasks, runner)
