# -*- coding: utf-8 -*-
"""
Клиент Supabase Auth.

Проверка access token делегируется провайдеру: GET /auth/v1/user
возвращает пользователя для валидного токена и 401 для остальных.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import aiohttp

from newsgrid.infrastructure.config.settings import Settings, get_settings
from newsgrid.shared.exceptions.infrastructure_exceptions import AuthProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    """Аутентифицированный пользователь."""

    id: UUID
    email: Optional[str] = None


class SupabaseAuthClient:
    """
    Клиент для работы с Supabase Auth.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.supabase_url.rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=self.settings.auth_timeout)

    def _headers(self, token: str) -> dict:
        headers = {"Authorization": f"Bearer {token}"}
        if self.settings.supabase_anon_key:
            headers["apikey"] = self.settings.supabase_anon_key
        return headers

    async def get_user(self, token: str) -> AuthUser:
        """
        Получить пользователя по access token.

        Raises:
            AuthProviderError: Токен невалиден или провайдер недоступен
        """
        url = f"{self.base_url}/auth/v1/user"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, headers=self._headers(token)) as response:
                    if response.status != 200:
                        logger.warning(f"[Auth] Token rejected: HTTP {response.status}")
                        raise AuthProviderError(f"Auth provider returned HTTP {response.status}")
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[Auth] Provider unavailable: {e}")
            raise AuthProviderError("Auth provider unavailable") from e

        try:
            return AuthUser(id=UUID(data["id"]), email=data.get("email"))
        except (KeyError, TypeError, ValueError) as e:
            raise AuthProviderError("Malformed user payload from auth provider") from e
