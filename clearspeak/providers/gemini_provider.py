from __future__ import annotations

from typing import Any, Dict, Optional

from clearspeak.core.config import GenerationParams
from clearspeak.providers.base import LLMProvider
from clearspeak.schemas.message import CallRequest


class GeminiProvider(LLMProvider):
    name = "gemini"

    def __init__(
        self,
        params: GenerationParams,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        if client is None and api_key:
            from google import genai
            client = genai.Client(api_key=api_key)
        super().__init__(params, client)

    async def _complete(self, request: CallRequest) -> Optional[str]:
        config: Dict[str, Any] = {
            "temperature": self._params.temperature,
            "max_output_tokens": self._params.max_tokens,
        }
        if request.wants_structured_output:
            config["response_mime_type"] = "application/json"
        response = await self._client.aio.models.generate_content(
            model=self._params.model,
            contents=request.prompt_text,
            config=config,
        )
        # Blocked or filtered prompts come back with no candidates.
        if not response or not getattr(response, "candidates", None):
            return None
        return response.text
