"""
Pydantic schemas для AI проверки и веб-утилит.
"""

from typing import Any, Dict, List, Optional, Union
from uuid import UUID
from pydantic import BaseModel, Field

from newsgrid.api.schemas.article_schemas import SourceSchema


class UrlCheckResponse(BaseModel):
    status: str
    reason: Optional[str] = None


class PageTitleRequest(BaseModel):
    url: str


class PageTitleResponse(BaseModel):
    title: str
    hostname: str


class VerifyArticleRequest(BaseModel):
    """Быстрый отчёт по данным формы."""

    headline: Optional[str] = None
    articleContent: Optional[str] = None
    userSources: Union[str, List[str], None] = None


class QuickReportResponse(BaseModel):
    report: str
    trust_score: Optional[int]
    credibility_rating: Optional[str]
    citations: List[str] = []
    model: Optional[str] = None


class AdvancedVerifyRequest(BaseModel):
    headline: Optional[str] = None
    content: Optional[str] = None
    sources: List[SourceSchema] = []
    draftId: Optional[UUID] = None


class ArticleIdRequest(BaseModel):
    article_id: Optional[UUID] = None


class ReportResponse(BaseModel):
    message: str
    report: str


class VerificationResponse(BaseModel):
    article_id: UUID
    status: str
    trust_score: Optional[int]
    credibility_rating: Optional[str]


class ClaimSearchRequest(BaseModel):
    claim: str = Field(..., min_length=1)


class ClaimSearchResponse(BaseModel):
    summary: str
    sources: List[Dict[str, Any]] = []
