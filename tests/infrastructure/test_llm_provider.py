"""
Тесты LLM провайдеров с подменённым requests.post.
"""

import pytest
from unittest.mock import MagicMock, patch

from newsgrid.infrastructure.ai.llm_provider import (
    GoogleProvider,
    LLMConfig,
    LLMProviderFactory,
    LLMProviderType,
    PerplexityProvider,
)
from newsgrid.infrastructure.config.settings import Settings
from newsgrid.shared.exceptions.infrastructure_exceptions import ExternalServiceError

GEMINI_OK = {"candidates": [{"content": {"parts": [{"text": '{"finalSummary": "ok"}'}]}}]}


def _response(status_code, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


def _gemini(sleep=None, max_attempts=3):
    return GoogleProvider(
        LLMConfig(provider=LLMProviderType.GOOGLE, model="gemini-1.5-flash", api_key="test-key"),
        max_attempts=max_attempts,
        retry_delay=1.5,
        sleep=sleep or MagicMock(),
    )


def test_gemini_retries_on_503_then_succeeds():
    """Два 503 подряд, третья попытка успешна."""
    sleep = MagicMock()
    provider = _gemini(sleep=sleep)

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.side_effect = [_response(503), _response(503), _response(200, GEMINI_OK)]
        text = provider.generate("prompt")

    assert text == '{"finalSummary": "ok"}'
    assert post.call_count == 3
    assert [c.args[0] for c in sleep.call_args_list] == [1.5, 3.0]


def test_gemini_gives_up_after_three_attempts():
    provider = _gemini()

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _response(503, text="overloaded")
        with pytest.raises(ExternalServiceError) as exc_info:
            provider.generate("prompt")

    assert post.call_count == 3
    assert exc_info.value.status_code == 503


def test_gemini_does_not_retry_other_errors():
    provider = _gemini()

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _response(400, text="bad request")
        with pytest.raises(ExternalServiceError):
            provider.generate("prompt")

    assert post.call_count == 1


def test_gemini_request_shape():
    provider = _gemini()

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _response(200, GEMINI_OK)
        provider.generate("prompt")

    url = post.call_args.args[0]
    assert url.endswith("/models/gemini-1.5-flash:generateContent")
    assert post.call_args.kwargs["params"] == {"key": "test-key"}
    assert post.call_args.kwargs["json"]["contents"][-1]["parts"][0]["text"] == "prompt"


def test_perplexity_chat_payload():
    provider = PerplexityProvider(LLMConfig(
        provider="perplexity", model="sonar-pro", api_key="pplx", temperature=0.2
    ))

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _response(200, {"choices": [{"message": {"content": "report"}}]})
        text = provider.generate("question", system_prompt="system")

    assert text == "report"
    assert post.call_args.args[0] == "https://api.perplexity.ai/chat/completions"
    body = post.call_args.kwargs["json"]
    assert body["model"] == "sonar-pro"
    assert body["temperature"] == 0.2
    assert body["messages"][0] == {"role": "system", "content": "system"}
    assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer pplx"


def test_perplexity_error_carries_status():
    provider = PerplexityProvider(LLMConfig(provider="perplexity", model="sonar-pro", api_key="pplx"))

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _response(429, text="rate limited")
        with pytest.raises(ExternalServiceError) as exc_info:
            provider.chat([{"role": "user", "content": "hi"}])

    assert exc_info.value.status_code == 429


def test_missing_api_key():
    provider = PerplexityProvider(LLMConfig(provider="perplexity", model="sonar-pro"))

    with pytest.raises(ExternalServiceError, match="API key"):
        provider.generate("question")


def test_factory_uses_settings():
    settings = Settings(google_api_key="g", gemini_max_attempts=5, perplexity_api_key="p")
    factory = LLMProviderFactory(settings)

    google = factory.google()
    perplexity = factory.perplexity(model="sonar-reasoning-pro")

    assert google.max_attempts == 5
    assert google.model == "gemini-1.5-flash"
    assert perplexity.model == "sonar-reasoning-pro"
    assert perplexity.api_key == "p"


def _non_json_response(text="<html>Bad Gateway</html>"):
    response = _response(200, text=text)
    response.json.side_effect = ValueError("Expecting value")
    return response


def test_perplexity_non_json_body():
    """200 с HTML вместо JSON превращается в ExternalServiceError."""
    provider = PerplexityProvider(LLMConfig(provider="perplexity", model="sonar-pro", api_key="pplx"))

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _non_json_response()
        with pytest.raises(ExternalServiceError, match="non-JSON"):
            provider.chat([{"role": "user", "content": "hi"}])


def test_gemini_non_json_body():
    provider = _gemini()

    with patch("newsgrid.infrastructure.ai.llm_provider.requests.post") as post:
        post.return_value = _non_json_response()
        with pytest.raises(ExternalServiceError, match="non-JSON"):
            provider.generate("prompt")

    assert post.call_count == 1
