"""Application services."""

from newsgrid.application.services.admin_service import AdminService
from newsgrid.application.services.article_service import ArticleService
from newsgrid.application.services.feed_service import Feed, FeedService, Repositories
from newsgrid.application.services.profile_service import BookmarkService, CategoryService, ProfileService

__all__ = [
    "AdminService",
    "ArticleService",
    "BookmarkService",
    "CategoryService",
    "Feed",
    "FeedService",
    "ProfileService",
    "Repositories",
]
