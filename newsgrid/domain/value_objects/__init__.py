"""Value objects домена."""

from newsgrid.domain.value_objects.article_status import ArticleStatus
from newsgrid.domain.value_objects.article_type import ArticleType
from newsgrid.domain.value_objects.source import Source, SourceKind

__all__ = ['ArticleStatus', 'ArticleType', 'Source', 'SourceKind']
