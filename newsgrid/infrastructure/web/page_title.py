"""
Получение заголовка страницы для карточки источника.
"""

import asyncio
import logging
from dataclasses import dataclass
from urllib.parse import urlparse

import aiohttp

from newsgrid.infrastructure.web.url_checker import page_title
from newsgrid.shared.exceptions.domain_exceptions import DomainValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageTitle:
    title: str
    hostname: str


def hostname_of(url: str) -> str:
    """
    Хост без www.

    Raises:
        DomainValidationError: Если это не абсолютный http(s) URL
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise DomainValidationError("Invalid URL")
    host = parsed.hostname
    return host[4:] if host.startswith("www.") else host


class PageTitleFetcher:
    """Заголовок страницы с фолбэком на сам URL."""

    HEADERS = {
        'User-Agent': (
            'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
            '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
        )
    }

    def __init__(self, timeout: float = 5.0):
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _fetch(self, url: str) -> tuple[int, str]:
        async with aiohttp.ClientSession(headers=self.HEADERS, timeout=self.timeout) as session:
            async with session.get(url) as response:
                return response.status, await response.text(errors="replace")

    async def fetch(self, url: str) -> PageTitle:
        hostname = hostname_of(url)

        try:
            status_code, html = await self._fetch(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.info(f"[PageTitle] {url[:80]}: {e}")
            return PageTitle(title=url, hostname=hostname)

        if not 200 <= status_code < 300:
            return PageTitle(title=url, hostname=hostname)

        return PageTitle(title=page_title(html) or url, hostname=hostname)
