"""
Failure taxonomy shared by the provider adapters, the orchestrator and
the response normalizer.

Per-provider failures (``ProviderError`` subclasses) are recovered by the
orchestrator; only ``AllProvidersFailedError`` and
``UnparseableResponseError`` reach the HTTP layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class FailureKind(str, Enum):
    DISABLED = "Disabled"
    EMPTY = "Empty"
    UPSTREAM = "Upstream"


@dataclass(frozen=True)
class Attempt:
    """One failed provider attempt, as recorded in the attempt log."""

    provider: str
    kind: FailureKind
    detail: str

    def describe(self) -> str:
        return f"{self.provider}:{self.detail}"


class ClearSpeakError(Exception):
    """Base class for failures surfaced by the message pipeline."""

    kind: str = "ClearSpeakError"


class ProviderError(ClearSpeakError):
    """A single provider could not produce text for a request."""

    failure_kind: FailureKind = FailureKind.UPSTREAM

    def __init__(self, provider: str, detail: str) -> None:
        super().__init__(detail)
        self.provider = provider
        self.detail = detail

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.failure_kind.value

    def to_attempt(self) -> Attempt:
        return Attempt(provider=self.provider, kind=self.failure_kind, detail=self.detail)


class ProviderDisabledError(ProviderError):
    """No credential is configured for the provider."""

    failure_kind = FailureKind.DISABLED


class ProviderEmptyError(ProviderError):
    """The provider answered but returned no usable text."""

    failure_kind = FailureKind.EMPTY


class ProviderUpstreamError(ProviderError):
    """The vendor call failed or did not finish before the deadline."""

    failure_kind = FailureKind.UPSTREAM


class AllProvidersFailedError(ClearSpeakError):
    kind = "AllProvidersFailed"

    def __init__(self, attempts: Sequence[Attempt]) -> None:
        self.attempts: tuple[Attempt, ...] = tuple(attempts)
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.attempts:
            return self.kind
        return f"{self.kind} :: " + "|".join(a.describe() for a in self.attempts)


class UnparseableResponseError(ClearSpeakError):
    """Structured output could not be recovered from the provider text."""

    kind = "Unparseable"

    def __init__(self, snippet: str = "") -> None:
        self.snippet = snippet
        message = self.kind
        if snippet:
            message = f"{self.kind} :: {snippet!r}"
        super().__init__(message)
