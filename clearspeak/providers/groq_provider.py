from __future__ import annotations

from typing import Any, Dict, Optional

from clearspeak.core.config import GenerationParams
from clearspeak.providers.base import LLMProvider
from clearspeak.schemas.message import CallRequest


class GroqProvider(LLMProvider):
    """LLM provider that calls the Groq API (groq SDK)."""

    name = "groq"

    def __init__(
        self,
        params: GenerationParams,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        if client is None and api_key:
            from groq import AsyncGroq
            client = AsyncGroq(api_key=api_key, max_retries=0)
        super().__init__(params, client)

    async def _complete(self, request: CallRequest) -> Optional[str]:
        kwargs: Dict[str, Any] = {
            "model": self._params.model,
            "messages": [{"role": "user", "content": request.prompt_text}],
            "temperature": self._params.temperature,
            "max_tokens": self._params.max_tokens,
        }
        if request.wants_structured_output:
            kwargs["response_format"] = {"type": "json_object"}
        response = await self._client.chat.completions.create(**kwargs)
        content = response.choices[0].message.content if response.choices else None
        return content
