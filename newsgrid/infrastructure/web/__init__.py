"""HTTP клиенты для проверки ссылок, заголовков страниц и Scrapfly."""

from newsgrid.infrastructure.web.page_title import PageTitle, PageTitleFetcher
from newsgrid.infrastructure.web.scrapfly_client import ScrapeResult, ScrapflyClient
from newsgrid.infrastructure.web.url_checker import UrlCheckResult, UrlChecker

__all__ = [
    'PageTitle',
    'PageTitleFetcher',
    'ScrapeResult',
    'ScrapflyClient',
    'UrlCheckResult',
    'UrlChecker',
]
