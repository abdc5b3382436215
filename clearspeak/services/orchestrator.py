"""
Provider failover.

``ProviderOrchestrator`` walks the configured provider order and returns
the text of the first provider that answers. Every failure on the way is
recorded as an ``Attempt``; when nothing succeeds the whole log is raised
inside ``AllProvidersFailedError``.

Two strategies are available:

- ``sequential`` (default): one provider at a time, each under the
  per-attempt deadline. Cheapest; latency adds up across failures.
- ``race``: all enabled providers at once, first success wins and the
  rest are cancelled. Lower tail latency, multiplied vendor spend.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from clearspeak.core.config import FailoverStrategy
from clearspeak.core.errors import (
    AllProvidersFailedError,
    Attempt,
    ProviderDisabledError,
    ProviderError,
)
from clearspeak.providers.base import LLMProvider
from clearspeak.schemas.message import CallRequest
from clearspeak.utils.timeout import with_timeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Text produced by the winning provider plus the failures before it."""

    text: str
    provider: str
    attempts: tuple[Attempt, ...] = ()


class ProviderOrchestrator:
    def __init__(
        self,
        providers: Mapping[str, LLMProvider],
        order: Sequence[str],
        timeout_ms: int,
        strategy: FailoverStrategy = "sequential",
    ) -> None:
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if strategy not in ("sequential", "race"):
            raise ValueError(f"Unsupported failover strategy: {strategy!r}")
        self._providers: Dict[str, LLMProvider] = dict(providers)
        self._order: tuple[str, ...] = tuple(dict.fromkeys(order))
        self._timeout_ms = timeout_ms
        self._strategy = strategy

    @property
    def order(self) -> tuple[str, ...]:
        return self._order

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def _adapter(self, name: str) -> Optional[LLMProvider]:
        provider = self._providers.get(name)
        if provider is None or not provider.enabled:
            return None
        return provider

    async def _attempt(self, name: str, request: CallRequest) -> str:
        provider = self._adapter(name)
        if provider is None:
            raise ProviderDisabledError(name, f"{name.upper()}_DISABLED")
        try:
            return await with_timeout(provider.generate(request), self._timeout_ms, name)
        except ProviderError as exc:
            # Attribute the failure to the order entry, whatever name the adapter reports.
            if exc.provider != name:
                raise type(exc)(name, exc.detail) from exc
            raise

    async def resolve(self, request: CallRequest) -> Resolution:
        """
        Return the first successful provider's text.

        Raises:
            AllProvidersFailedError: every provider in the order failed, or
                the order is empty.
        """
        if self._strategy == "race":
            return await self._resolve_racing(request)
        return await self._resolve_sequential(request)

    async def _resolve_sequential(self, request: CallRequest) -> Resolution:
        attempts: List[Attempt] = []
        for name in self._order:
            try:
                text = await self._attempt(name, request)
            except ProviderError as exc:
                attempt = exc.to_attempt()
                attempts.append(attempt)
                logger.warning(
                    "Provider %s failed (%s): %s",
                    name,
                    attempt.kind.value,
                    attempt.detail,
                )
                continue
            self._log_success(name, attempts)
            return Resolution(text=text, provider=name, attempts=tuple(attempts))
        raise self._exhausted(attempts)

    async def _resolve_racing(self, request: CallRequest) -> Resolution:
        failures: Dict[str, Attempt] = {}
        tasks: Dict[asyncio.Task, str] = {}
        for name in self._order:
            if self._adapter(name) is None:
                failures[name] = ProviderDisabledError(name, f"{name.upper()}_DISABLED").to_attempt()
                continue
            tasks[asyncio.ensure_future(self._attempt(name, request))] = name

        pending = set(tasks)
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                # Several tasks may finish in the same tick; prefer the earlier one in the order.
                for task in sorted(done, key=lambda t: self._order.index(tasks[t])):
                    name = tasks[task]
                    exc = task.exception()
                    if exc is None:
                        ordered = self._in_order(failures)
                        self._log_success(name, ordered)
                        return Resolution(text=task.result(), provider=name, attempts=tuple(ordered))
                    if not isinstance(exc, ProviderError):
                        raise exc
                    failures[name] = exc.to_attempt()
                    logger.warning("Provider %s failed (%s): %s", name, exc.kind, exc.detail)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
                elif not task.cancelled():
                    task.exception()
        raise self._exhausted(self._in_order(failures))

    def _in_order(self, failures: Mapping[str, Attempt]) -> List[Attempt]:
        return [failures[name] for name in self._order if name in failures]

    def _log_success(self, name: str, attempts: Sequence[Attempt]) -> None:
        if attempts:
            logger.info(
                "Provider %s succeeded after %d failed attempt(s): %s",
                name,
                len(attempts),
                "|".join(a.describe() for a in attempts),
            )
        else:
            logger.info("Provider %s succeeded", name)

    def _exhausted(self, attempts: Sequence[Attempt]) -> AllProvidersFailedError:
        error = AllProvidersFailedError(attempts)
        if not self._order:
            logger.error("No providers configured; provider order is empty")
        else:
            logger.error("All providers failed: %s", error)
        return error
