"""Exponential backoff with jitter for transient remote-model failures."""
import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from xray_analyst.constants import (
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    MAX_JITTER_MS,
    MSG_RETRIES_EXHAUSTED,
    MSG_RETRIES_EXHAUSTED_LOG,
    MSG_RETRYING,
)
from xray_analyst.errors import RemoteServiceError, RetriesExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
Jitter = Callable[[], float]


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")


DEFAULT_RETRY_POLICY = RetryPolicy()


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, RemoteServiceError) and exc.transient


def random_jitter_ms() -> float:
    return random.random() * MAX_JITTER_MS


def backoff_delay_ms(attempt: int, base_delay_ms: int, jitter_ms: float) -> float:
    """Delay before retrying after the 0-indexed ``attempt`` failed."""
    return base_delay_ms * 2 ** attempt + jitter_ms


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    *,
    sleep: Sleep = asyncio.sleep,
    jitter: Optional[Jitter] = None,
) -> T:
    """Run ``operation`` until it succeeds, fails permanently, or attempts run out.

    Permanent failures propagate unchanged after a single attempt. Transient
    failures are retried; once ``policy.max_attempts`` is spent the caller gets
    RetriesExhausted chained from the last transient error.
    """
    jitter = jitter or random_jitter_ms
    for attempt in range(policy.max_attempts - 1):
        try:
            return await operation()
        except Exception as exc:
            if not is_transient(exc):
                raise
            delay = backoff_delay_ms(attempt, policy.base_delay_ms, jitter())
            logger.warning(MSG_RETRYING, round(delay), attempt + 1, policy.max_attempts)
            await sleep(delay / 1000)
    try:
        return await operation()
    except Exception as exc:
        if not is_transient(exc):
            raise
        logger.error(MSG_RETRIES_EXHAUSTED_LOG, policy.max_attempts)
        raise RetriesExhausted(MSG_RETRIES_EXHAUSTED) from exc
