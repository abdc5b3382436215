from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from clearspeak.core.errors import ProviderUpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _discard_late_outcome(task: asyncio.Task) -> None:
    # Retrieve the outcome so asyncio never reports it as unhandled.
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Late failure after timeout discarded: %r", exc)
    else:
        logger.debug("Late result after timeout discarded")


async def with_timeout(operation: Awaitable[T], timeout_ms: int, label: str = "call") -> T:
    """
    Await ``operation`` for at most ``timeout_ms`` milliseconds.

    On deadline the operation is cancelled and abandoned: the caller gets
    ProviderUpstreamError("TIMEOUT_<label>") right away and whatever the
    operation does later is swallowed by a done-callback.
    """
    task = asyncio.ensure_future(operation)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000.0)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return task.result()

    task.add_done_callback(_discard_late_outcome)
    task.cancel()
    logger.warning("%s did not finish within %sms", label, timeout_ms)
    raise ProviderUpstreamError(label, f"TIMEOUT_{label}")
