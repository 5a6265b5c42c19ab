# -*- coding: utf-8 -*-
"""
Проверка ссылок-источников: жива ли страница и есть ли на ней контент.

Статусы:
- valid: страница отвечает 200 и содержит текст
- invalid: не-200, таймаут или DNS/сетевая ошибка
- broken: 200, но это страница "not found" или почти пустая
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

NOT_FOUND_PHRASES = (
    "page not found",
    "404",
    "this page does not exist",
    "we couldn't find the page",
    "we can't find",
    "page doesn't exist",
)
MIN_WORD_COUNT = 100


@dataclass(frozen=True)
class UrlCheckResult:
    status: str
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"status": self.status}
        if self.reason:
            data["reason"] = self.reason
        return data


def page_title(html: str) -> str:
    """Текст <title> или пустая строка."""
    soup = BeautifulSoup(html, 'html.parser')
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""


def classify_page(status_code: int, html: str) -> UrlCheckResult:
    """
    Классифицировать ответ сервера.

    Отдельно от сетевого кода, чтобы правила проверялись без HTTP.
    """
    if status_code != 200:
        return UrlCheckResult("invalid", f"Server returned HTTP {status_code}")

    body = html.lower()
    title = page_title(html).lower()

    if any(phrase in body or phrase in title for phrase in NOT_FOUND_PHRASES):
        return UrlCheckResult("broken", "Invalid (Page not found)")

    # Считаем слова по сырому ответу, как браузерная проверка
    word_count = len(html.split())
    if word_count < MIN_WORD_COUNT:
        return UrlCheckResult("broken", f"Page content is too short ({word_count} words)")

    return UrlCheckResult("valid")


class UrlChecker:
    """Проверка доступности ссылки."""

    def __init__(self, timeout: float = 8.0):
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _fetch(self, url: str) -> tuple[int, str]:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(url) as response:
                return response.status, await response.text(errors="replace")

    async def check(self, url: str) -> UrlCheckResult:
        try:
            status_code, html = await self._fetch(url)
        except asyncio.TimeoutError:
            return UrlCheckResult("invalid", "Request timed out")
        except (aiohttp.ClientError, ValueError) as e:
            logger.info(f"[UrlChecker] {url[:80]}: {e}")
            return UrlCheckResult("invalid", "Failed to fetch or resolve URL")

        return classify_page(status_code, html)
