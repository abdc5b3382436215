import asyncio
from typing import Callable, List, Optional

import pytest

from clearspeak.core.config import GenerationParams
from clearspeak.providers.base import LLMProvider
from clearspeak.schemas.message import CallRequest


class FakeProvider(LLMProvider):
    """In-memory provider: replies, raises, or stalls as configured."""

    def __init__(
        self,
        name: str,
        reply: Optional[str] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        enabled: bool = True,
    ) -> None:
        super().__init__(
            GenerationParams(model=f"{name}-test", max_tokens=50, temperature=0.0),
            client=object() if enabled else None,
        )
        self.name = name
        self.reply = reply
        self.error = error
        self.delay = delay
        self.requests: List[CallRequest] = []
        self.finished = False
        self.cancelled = False

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def _complete(self, request: CallRequest) -> Optional[str]:
        self.requests.append(request)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        self.finished = True
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    return FakeProvider
