"""
FastAPI Routes администратора.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends

from newsgrid.api.dependencies import get_admin_service, require_admin
from newsgrid.api.schemas.article_schemas import ArticleResponse, StatusUpdateRequest
from newsgrid.application.services.admin_service import AdminService
from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.infrastructure.auth.supabase_auth import AuthUser

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/articles", response_model=List[ArticleResponse])
async def review_queue(
    status: str = ArticleStatus.PENDING_REVIEW.value,
    admin: AuthUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Статьи в статусе, старые первыми."""
    articles = await service.list_by_status(status)
    return [ArticleResponse.from_entity(a) for a in articles]


@router.put("/articles/{article_id}/status", response_model=ArticleResponse)
async def override_status(
    article_id: UUID,
    request: StatusUpdateRequest,
    admin: AuthUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    article = await service.override_status(article_id, request.status)
    return ArticleResponse.from_entity(article)
