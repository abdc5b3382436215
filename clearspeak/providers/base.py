from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from clearspeak.core.config import GenerationParams
from clearspeak.core.errors import (
    ProviderDisabledError,
    ProviderEmptyError,
    ProviderError,
    ProviderUpstreamError,
)
from clearspeak.schemas.message import CallRequest

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """
    Interface for the LLM vendors a message can be routed to.

    Implementations only translate a CallRequest into one vendor call and
    pull the text out of the vendor's response. Credential checks, error
    translation and empty-output detection live in ``generate`` so every
    vendor fails with the same exception types.
    """

    name: str = ""

    def __init__(self, params: GenerationParams, client: Optional[Any] = None) -> None:
        self._params = params
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None

    @property
    def params(self) -> GenerationParams:
        return self._params

    async def generate(self, request: CallRequest) -> str:
        """
        Send the prompt to the vendor once and return the trimmed response text.

        Raises ProviderDisabledError, ProviderEmptyError or
        ProviderUpstreamError. Never retries.
        """
        if not self.enabled:
            raise ProviderDisabledError(self.name, f"{self.name.upper()}_DISABLED")

        logger.info(
            "%s request: model=%s structured=%s max_tokens=%s",
            self.name,
            self._params.model,
            request.wants_structured_output,
            self._params.max_tokens,
        )
        try:
            raw = await self._complete(request)
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderUpstreamError(self.name, f"{type(exc).__name__}: {exc}") from exc

        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            raise ProviderEmptyError(self.name, f"{self.name.upper()}_EMPTY")
        return text

    @abstractmethod
    async def _complete(self, request: CallRequest) -> Optional[str]:
        """
        Perform the vendor call and return the raw text, or None when the
        response carries no text.
        """
        ...
