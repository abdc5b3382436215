from __future__ import annotations

from typing import Dict, Mapping, Type

from clearspeak.core.config import KNOWN_PROVIDERS, Settings
from clearspeak.providers.anthropic_provider import AnthropicProvider
from clearspeak.providers.base import LLMProvider
from clearspeak.providers.gemini_provider import GeminiProvider
from clearspeak.providers.groq_provider import GroqProvider
from clearspeak.providers.openai_provider import OpenAIProvider

PROVIDER_CLASSES: Mapping[str, Type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "gemini": GeminiProvider,
    "groq": GroqProvider,
}


def get_provider(provider_name: str, settings: Settings) -> LLMProvider:
    """
    Return the adapter for the given provider name.

    A provider without a configured API key is still returned; it is
    disabled and fails every call with ProviderDisabledError.

    Raises:
        ValueError: If provider_name is not supported.
    """
    name = (provider_name or "").strip().lower()
    provider_cls = PROVIDER_CLASSES.get(name)
    if provider_cls is None:
        raise ValueError(
            f"Unsupported LLM provider: {provider_name!r}. "
            f"Use one of: {', '.join(KNOWN_PROVIDERS)}."
        )
    return provider_cls(
        settings.generation_params(name),
        api_key=settings.api_key_for(name),
    )


def build_providers(settings: Settings) -> Dict[str, LLMProvider]:
    """Build one adapter per known provider from the startup settings."""
    return {name: get_provider(name, settings) for name in KNOWN_PROVIDERS}
