"""
FastAPI Routes: профиль, закладки, категории.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends

from newsgrid.api.dependencies import (
    get_bookmark_service,
    get_category_service,
    get_current_user,
    get_profile_service,
)
from newsgrid.api.schemas.article_schemas import ArticleCardResponse
from newsgrid.api.schemas.profile_schemas import (
    BookmarkStatusResponse,
    ProfileResponse,
    UpdateProfileRequest,
)
from newsgrid.application.services.profile_service import BookmarkService, CategoryService, ProfileService
from newsgrid.infrastructure.auth.supabase_auth import AuthUser

router = APIRouter(tags=["account"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: AuthUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    return ProfileResponse.from_entity(await service.get(user.id))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    user: AuthUser = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Обновить имя и фамилию."""
    profile = await service.update_name(user.id, request.first_name, request.last_name)
    return ProfileResponse.from_entity(profile)


@router.get("/categories", response_model=List[str])
async def list_categories(service: CategoryService = Depends(get_category_service)):
    return await service.list_categories()


@router.get("/bookmarks", response_model=List[ArticleCardResponse])
async def list_bookmarks(
    user: AuthUser = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    articles = await service.list_articles(user.id)
    return [ArticleCardResponse.from_entity(a) for a in articles]


@router.get("/bookmarks/{article_id}", response_model=BookmarkStatusResponse)
async def bookmark_status(
    article_id: UUID,
    user: AuthUser = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    bookmarked = await service.is_bookmarked(user.id, article_id)
    return BookmarkStatusResponse(article_id=article_id, bookmarked=bookmarked)


@router.post("/bookmarks/{article_id}", response_model=BookmarkStatusResponse, status_code=201)
async def add_bookmark(
    article_id: UUID,
    user: AuthUser = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    await service.add(user.id, article_id)
    return BookmarkStatusResponse(article_id=article_id, bookmarked=True)


@router.delete("/bookmarks/{article_id}", response_model=BookmarkStatusResponse)
async def remove_bookmark(
    article_id: UUID,
    user: AuthUser = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    await service.remove(user.id, article_id)
    return BookmarkStatusResponse(article_id=article_id, bookmarked=False)
