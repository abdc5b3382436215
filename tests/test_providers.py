"""Tests for the vendor adapters with the SDK clients replaced by fakes."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from clearspeak.core.config import GenerationParams, Settings
from clearspeak.core.errors import (
    ProviderDisabledError,
    ProviderEmptyError,
    ProviderUpstreamError,
)
from clearspeak.providers import build_providers, get_provider
from clearspeak.providers.anthropic_provider import AnthropicProvider
from clearspeak.providers.gemini_provider import GeminiProvider
from clearspeak.providers.groq_provider import GroqProvider
from clearspeak.providers.openai_provider import OpenAIProvider
from clearspeak.schemas.message import CallRequest

PARAMS = GenerationParams(model="test-model", max_tokens=123, temperature=0.2)
PLAIN = CallRequest(prompt_text="Rewrite this", wants_structured_output=False)
STRUCTURED = CallRequest(prompt_text="Analyze this", wants_structured_output=True)


def _chat_client(content):
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    create = AsyncMock(return_value=response)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


# --- OpenAI ---


def test_openai_returns_trimmed_text_and_requests_json_mode():
    client, create = _chat_client('  {"tone": "Neutral"}\n')
    provider = OpenAIProvider(PARAMS, client=client)

    text = asyncio.run(provider.generate(STRUCTURED))

    assert text == '{"tone": "Neutral"}'
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["max_tokens"] == 123
    assert kwargs["temperature"] == 0.2
    assert kwargs["messages"] == [{"role": "user", "content": "Analyze this"}]
    assert kwargs["response_format"] == {"type": "json_object"}


def test_openai_plain_request_has_no_response_format():
    client, create = _chat_client("Hi team")
    asyncio.run(OpenAIProvider(PARAMS, client=client).generate(PLAIN))
    assert "response_format" not in create.await_args.kwargs


def test_openai_empty_content_is_empty_failure():
    client, _ = _chat_client(None)
    with pytest.raises(ProviderEmptyError) as info:
        asyncio.run(OpenAIProvider(PARAMS, client=client).generate(PLAIN))
    assert info.value.detail == "OPENAI_EMPTY"
    assert info.value.provider == "openai"


def test_openai_sdk_error_is_upstream_failure():
    create = AsyncMock(side_effect=RuntimeError("401 invalid api key"))
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    with pytest.raises(ProviderUpstreamError) as info:
        asyncio.run(OpenAIProvider(PARAMS, client=client).generate(PLAIN))

    assert "401 invalid api key" in info.value.detail
    assert create.await_count == 1


def test_openai_without_key_is_disabled():
    provider = OpenAIProvider(PARAMS)

    assert provider.enabled is False
    with pytest.raises(ProviderDisabledError) as info:
        asyncio.run(provider.generate(PLAIN))
    assert info.value.detail == "OPENAI_DISABLED"


# --- Anthropic ---


def _anthropic_client(blocks):
    create = AsyncMock(return_value=SimpleNamespace(content=blocks))
    return SimpleNamespace(messages=SimpleNamespace(create=create)), create


def test_anthropic_joins_text_blocks():
    client, create = _anthropic_client(
        [SimpleNamespace(type="text", text="Hello "), SimpleNamespace(type="text", text="there")]
    )

    text = asyncio.run(AnthropicProvider(PARAMS, client=client).generate(STRUCTURED))

    assert text == "Hello there"
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["max_tokens"] == 123
    assert "response_format" not in kwargs


def test_anthropic_without_text_blocks_is_empty_failure():
    client, _ = _anthropic_client([SimpleNamespace(type="tool_use", id="x")])
    with pytest.raises(ProviderEmptyError) as info:
        asyncio.run(AnthropicProvider(PARAMS, client=client).generate(PLAIN))
    assert info.value.detail == "ANTHROPIC_EMPTY"


# --- Gemini ---


def _gemini_client(text, candidates=(object(),)):
    response = SimpleNamespace(text=text, candidates=list(candidates))
    generate = AsyncMock(return_value=response)
    client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))
    return client, generate


def test_gemini_structured_request_sets_json_mime_type():
    client, generate = _gemini_client('{"score": 10}')

    text = asyncio.run(GeminiProvider(PARAMS, client=client).generate(STRUCTURED))

    assert text == '{"score": 10}'
    kwargs = generate.await_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["contents"] == "Analyze this"
    assert kwargs["config"] == {
        "temperature": 0.2,
        "max_output_tokens": 123,
        "response_mime_type": "application/json",
    }


def test_gemini_none_text_is_empty_failure():
    client, _ = _gemini_client(None)
    with pytest.raises(ProviderEmptyError):
        asyncio.run(GeminiProvider(PARAMS, client=client).generate(PLAIN))


def test_gemini_without_candidates_is_empty_failure():
    client, _ = _gemini_client("ignored", candidates=())
    with pytest.raises(ProviderEmptyError) as info:
        asyncio.run(GeminiProvider(PARAMS, client=client).generate(PLAIN))
    assert info.value.detail == "GEMINI_EMPTY"


# --- Groq ---


def test_groq_uses_chat_completions():
    client, create = _chat_client("Sure thing")

    text = asyncio.run(GroqProvider(PARAMS, client=client).generate(STRUCTURED))

    assert text == "Sure thing"
    assert create.await_args.kwargs["response_format"] == {"type": "json_object"}


# --- Factory ---


def test_get_provider_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        get_provider("mistral", Settings())


def test_build_providers_follows_credentials():
    settings = Settings(
        openai_api_key="sk-test",
        anthropic_api_key=None,
        gemini_api_key=None,
        groq_api_key=None,
        openai_model="gpt-4o",
    )

    providers = build_providers(settings)

    assert set(providers) == {"openai", "anthropic", "gemini", "groq"}
    assert providers["openai"].enabled is True
    assert providers["openai"].params.model == "gpt-4o"
    assert providers["anthropic"].enabled is False
    assert providers["gemini"].enabled is False
    assert providers["groq"].enabled is False
