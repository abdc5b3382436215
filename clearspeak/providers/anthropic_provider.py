from __future__ import annotations

from typing import Any, Optional

from clearspeak.core.config import GenerationParams
from clearspeak.providers.base import LLMProvider
from clearspeak.schemas.message import CallRequest


class AnthropicProvider(LLMProvider):
    """LLM provider that calls the Anthropic Messages API (anthropic SDK)."""

    name = "anthropic"

    def __init__(
        self,
        params: GenerationParams,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        if client is None and api_key:
            from anthropic import AsyncAnthropic
            client = AsyncAnthropic(api_key=api_key, max_retries=0)
        super().__init__(params, client)

    async def _complete(self, request: CallRequest) -> Optional[str]:
        # The Messages API has no JSON response mode; the prompt asks for JSON.
        response = await self._client.messages.create(
            model=self._params.model,
            max_tokens=self._params.max_tokens,
            temperature=self._params.temperature,
            messages=[{"role": "user", "content": request.prompt_text}],
        )
        blocks = getattr(response, "content", None) or []
        texts = [
            block.text
            for block in blocks
            if getattr(block, "type", None) == "text" and isinstance(getattr(block, "text", None), str)
        ]
        return "".join(texts) if texts else None
