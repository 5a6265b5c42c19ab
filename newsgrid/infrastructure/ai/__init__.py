# -*- coding: utf-8 -*-
"""
AI Infrastructure - абстракции для работы с LLM провайдерами.

Компоненты:
- LLMProvider: Базовый класс для LLM провайдеров
- PerplexityProvider: OpenAI-совместимый chat completions Perplexity
- GoogleProvider: Google Gemini generateContent с повтором на 503
- LLMProviderFactory: Фабрика для создания провайдеров
"""

from newsgrid.infrastructure.ai.llm_provider import (
    GoogleProvider,
    LLMConfig,
    LLMProvider,
    LLMProviderFactory,
    LLMProviderType,
    PerplexityProvider,
)

__all__ = [
    'GoogleProvider',
    'LLMConfig',
    'LLMProvider',
    'LLMProviderFactory',
    'LLMProviderType',
    'PerplexityProvider',
]
