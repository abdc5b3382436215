"""
LLM provider abstraction layer.

All vendor-specific logic lives in provider implementations.
The orchestrator depends only on the LLMProvider interface.
"""

from clearspeak.providers.base import LLMProvider
from clearspeak.providers.factory import build_providers, get_provider

__all__ = ["LLMProvider", "build_providers", "get_provider"]
