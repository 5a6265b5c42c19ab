# -*- coding: utf-8 -*-
"""
Клиент Scrapfly - скрапинг страниц источников с рендерингом JS.

Используется для построения полного отчёта: контент каждого источника
попадает в промпт, а код ответа сайта помечает битые источники.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from newsgrid.infrastructure.config.settings import Settings, get_settings
from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrapeResult:
    url: str
    content: str
    status_code: Optional[int]

    @property
    def is_broken(self) -> bool:
        return self.status_code != 200


class ScrapflyClient:
    """
    Обёртка над Scrapfly Scrape API.

    Параметры: Anti-Scraping Protection, рендеринг JS, прокси из США.
    """

    def __init__(self, settings: Optional[Settings] = None, timeout: float = 90.0):
        self.settings = settings or get_settings()
        self.base_url = self.settings.scrapfly_base_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def scrape(self, url: str) -> ScrapeResult:
        """
        Скрапнуть страницу.

        Raises:
            ExternalServiceError: Scrapfly не смог получить страницу
        """
        if not self.settings.scrapfly_api_key:
            raise ExternalServiceError("SCRAPFLY_API_KEY is not configured", service="scrapfly")

        params = {
            "key": self.settings.scrapfly_api_key,
            "url": url,
            "asp": "true",
            "render_js": "true",
            "country": "us",
        }

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(f"{self.base_url}/scrape", params=params) as response:
                    payload = await response.json(content_type=None)
                    if response.status != 200:
                        message = (payload or {}).get("message") or f"HTTP {response.status}"
                        raise ExternalServiceError(
                            f"Failed to scrape URL: {url}. Reason: {message}",
                            status_code=response.status,
                            service="scrapfly",
                        )
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Scrapfly error while scraping {url}: {e}")
            raise ExternalServiceError(f"Failed to scrape URL: {url}. Reason: {e}", service="scrapfly") from e

        result = payload.get("result") or {}
        return ScrapeResult(
            url=url,
            content=result.get("content") or "",
            status_code=result.get("status_code") or (result.get("response_headers") or {}).get("status"),
        )
