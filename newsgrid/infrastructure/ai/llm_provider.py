# -*- coding: utf-8 -*-
"""
Модуль провайдеров LLM.

- PerplexityProvider: OpenAI-совместимый /chat/completions (отчёты, поиск)
- GoogleProvider: Gemini generateContent (JSON отчёт), повтор на 503

Провайдеры синхронные (requests); из async кода вызываются через
run_in_threadpool.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests

from newsgrid.infrastructure.config.settings import Settings, get_settings
from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


# =============================================================================
# Перечисления и конфигурация
# =============================================================================

class LLMProviderType(str, Enum):
    """
    Типы поддерживаемых LLM провайдеров.
    """
    PERPLEXITY = "perplexity"
    GOOGLE = "google"


@dataclass
class LLMConfig:
    """
    Конфигурация LLM провайдера.
    """
    provider: LLMProviderType
    model: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = 120.0

    PERPLEXITY_DEFAULT_URL = "https://api.perplexity.ai"
    GOOGLE_DEFAULT_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __post_init__(self):
        if isinstance(self.provider, str):
            self.provider = LLMProviderType(self.provider.lower())

    def get_base_url(self) -> str:
        if self.base_url:
            return self.base_url.rstrip('/')

        defaults = {
            LLMProviderType.PERPLEXITY: self.PERPLEXITY_DEFAULT_URL,
            LLMProviderType.GOOGLE: self.GOOGLE_DEFAULT_URL,
        }
        return defaults.get(self.provider, "")


# =============================================================================
# Базовый провайдер
# =============================================================================

class LLMProvider(ABC):
    """Абстрактный базовый класс для LLM провайдеров."""

    def __init__(self, config: LLMConfig):
        self.config = config
        self.provider_name = self.config.provider.value
        self.model = self.config.model
        self.api_key = self.config.api_key
        self.base_url = self.config.get_base_url()

        if not self.api_key:
            logger.warning(f"Провайдер {self.provider_name} создан без API ключа")
        logger.debug(f"Провайдер {self.provider_name} инициализирован, модель {self.model}")

    @abstractmethod
    def generate(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None,
            **kwargs
    ) -> str:
        pass

    def _ensure_api_key(self) -> None:
        if not self.api_key:
            raise ExternalServiceError(
                f"{self.provider_name} API key is not configured",
                service=self.provider_name,
            )

    def _fail(self, message: str, status_code: Optional[int] = None) -> ExternalServiceError:
        logger.error(message)
        return ExternalServiceError(message, status_code=status_code, service=self.provider_name)


# =============================================================================
# Perplexity
# =============================================================================

class PerplexityProvider(LLMProvider):
    """Провайдер Perplexity с OpenAI-совместимым API."""

    def __init__(self, config: LLMConfig):
        super().__init__(config)
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    def chat(
            self,
            messages: List[Dict[str, str]],
            model: Optional[str] = None,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None,
            **extra: Any
    ) -> Dict[str, Any]:
        """
        Сырой вызов /chat/completions.

        Returns:
            JSON ответа целиком (choices, citations, ...)

        Raises:
            ExternalServiceError: Не-200 ответ или сетевая ошибка
        """
        self._ensure_api_key()

        data: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
        }
        temperature = temperature if temperature is not None else self.config.temperature
        if temperature is not None:
            data["temperature"] = temperature
        max_tokens = max_tokens or self.config.max_tokens
        if max_tokens:
            data["max_tokens"] = max_tokens
        data.update(extra)

        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers=self.headers,
                json=data,
                timeout=self.config.timeout
            )
        except requests.exceptions.Timeout:
            raise self._fail("Perplexity timeout")
        except requests.exceptions.RequestException as e:
            raise self._fail(f"Perplexity request error: {e}")

        if response.status_code != 200:
            raise self._fail(
                f"Perplexity {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise self._fail(f"Perplexity returned non-JSON body: {response.text[:200]}")

    def generate(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None,
            **kwargs
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        result = self.chat(messages, temperature=temperature, max_tokens=max_tokens, **kwargs)
        return self.message_content(result)

    @staticmethod
    def message_content(result: Dict[str, Any]) -> str:
        """Текст первого choice."""
        try:
            return result["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            raise ExternalServiceError("Perplexity returned no choices", service="perplexity")


# =============================================================================
# Google Gemini
# =============================================================================

class GoogleProvider(LLMProvider):
    """
    Провайдер Google Gemini с нативным API.

    На HTTP 503 (модель перегружена) запрос повторяется: всего max_attempts
    попыток, пауза retry_delay * номер попытки.
    """

    RETRYABLE_STATUS = 503

    def __init__(
            self,
            config: LLMConfig,
            max_attempts: int = 3,
            retry_delay: float = 1.5,
            sleep: Callable[[float], None] = time.sleep
    ):
        super().__init__(config)
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep

    def generate(
            self,
            prompt: str,
            system_prompt: Optional[str] = None,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None,
            **kwargs
    ) -> str:
        self._ensure_api_key()

        contents = []
        if system_prompt:
            contents.append({
                "role": "user",
                "parts": [{"text": f"System: {system_prompt}"}]
            })
            contents.append({
                "role": "model",
                "parts": [{"text": "Understood."}]
            })
        contents.append({
            "role": "user",
            "parts": [{"text": prompt}]
        })

        data: Dict[str, Any] = {"contents": contents}
        generation_config = {}
        temperature = temperature if temperature is not None else self.config.temperature
        if temperature is not None:
            generation_config["temperature"] = temperature
        max_tokens = max_tokens or self.config.max_tokens
        if max_tokens:
            generation_config["maxOutputTokens"] = max_tokens
        if generation_config:
            data["generationConfig"] = generation_config

        result = self._post_with_retry(data)

        try:
            return result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise self._fail(f"Google не вернул кандидатов: {str(result)[:200]}")

    def _post_with_retry(self, data: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/models/{self.model}:generateContent"

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = requests.post(
                    url,
                    params={"key": self.api_key},
                    json=data,
                    timeout=self.config.timeout
                )
            except requests.exceptions.RequestException as e:
                raise self._fail(f"Google request error: {e}")

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError:
                    raise self._fail(f"Google returned non-JSON body: {response.text[:200]}")

            if response.status_code == self.RETRYABLE_STATUS and attempt < self.max_attempts:
                delay = self.retry_delay * attempt
                logger.warning(
                    f"Gemini API overloaded (503). Retrying attempt {attempt + 1}/{self.max_attempts} "
                    f"in {delay:.1f}s"
                )
                self._sleep(delay)
                continue

            raise self._fail(
                f"Ошибка Google: {response.status_code} {response.text[:200]}",
                status_code=response.status_code,
            )

        raise self._fail("Failed to get response from Gemini after multiple attempts.")


# =============================================================================
# Фабрика провайдеров
# =============================================================================

class LLMProviderFactory:
    """Фабрика для создания LLM провайдеров из настроек."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def perplexity(
            self,
            model: Optional[str] = None,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None
    ) -> PerplexityProvider:
        return PerplexityProvider(LLMConfig(
            provider=LLMProviderType.PERPLEXITY,
            model=model or self.settings.perplexity_report_model,
            temperature=temperature,
            max_tokens=max_tokens,
            api_key=self.settings.perplexity_api_key,
            base_url=self.settings.perplexity_base_url,
        ))

    def google(self, model: Optional[str] = None) -> GoogleProvider:
        return GoogleProvider(
            LLMConfig(
                provider=LLMProviderType.GOOGLE,
                model=model or self.settings.gemini_model,
                api_key=self.settings.google_api_key,
            ),
            max_attempts=self.settings.gemini_max_attempts,
            retry_delay=self.settings.gemini_retry_delay,
        )
