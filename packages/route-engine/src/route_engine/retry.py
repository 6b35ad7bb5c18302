from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from route_engine.exceptions import NavigationError, ProviderError

T = TypeVar("T")
logger = logging.getLogger(__name__)


def _is_domain_outcome(exc: Exception) -> bool:
    # AddressNotFoundError and friends are answers, not provider failures
    return isinstance(exc, NavigationError) and not isinstance(exc, ProviderError)


async def with_exponential_backoff(
    operation: Callable[[], Awaitable[T]],
    retries: int = 1,
    base_delay_seconds: float = 0.1,
    on_retry: Callable[[int, float], None] | None = None,
) -> T:
    if retries < 1:
        raise ValueError("retries must be at least 1")
    attempt = 0
    while attempt < retries:
        try:
            return await operation()
        except Exception as exc:
            if _is_domain_outcome(exc):
                raise
            attempt += 1
            if attempt >= retries:
                raise ProviderError(str(exc) or type(exc).__name__) from exc
            delay = base_delay_seconds * (2 ** (attempt - 1))
            if on_retry:
                on_retry(attempt, delay)
            await asyncio.sleep(delay)
    raise ProviderError("retry attempts exhausted")


async def call_provider(
    operation: Callable[[], Awaitable[T]],
    timeout_seconds: float,
    retries: int = 1,
    base_delay_seconds: float = 0.1,
) -> T:
    """Run a provider call with a per-attempt timeout and bounded backoff.

    Any failure other than a domain outcome comes back as ``ProviderError``.
    """
    return await with_exponential_backoff(
        lambda: asyncio.wait_for(operation(), timeout=timeout_seconds),
        retries=retries,
        base_delay_seconds=base_delay_seconds,
    )


async def attempt_or_none(
    operation: Callable[[], Awaitable[T | None]],
    timeout_seconds: float,
    retries: int = 1,
    label: str = "provider_call",
) -> T | None:
    try:
        return await call_provider(operation, timeout_seconds=timeout_seconds, retries=retries)
    except ProviderError as exc:
        logger.warning("provider_call_failed", extra={"call": label, "reason": str(exc)})
        return None
