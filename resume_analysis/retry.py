"""Retry logic with exponential backoff for upstream text-generation calls."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .errors import is_rate_limit_error

logger = logging.getLogger(__name__)

T = TypeVar('T')

RetryCallback = Callable[[int, float, BaseException], None]


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""
    max_attempts: int = 3  # retries after the first call
    base_delay: float = 1.0
    max_delay: float = 60.0
    exponential_base: float = 2.0


async def retry_with_backoff(
    func: Callable[..., Any],
    config: RetryConfig,
    *args: Any,
    on_retry: Optional[RetryCallback] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    **kwargs: Any
) -> T:
    """
    Execute a function, retrying rate-limited failures with exponential backoff.

    Args:
        func: Sync or async function to execute
        config: Retry configuration
        *args: Positional arguments for func
        on_retry: Called with (retry number, delay, error) before each wait
        sleep: Awaitable used to wait between attempts
        **kwargs: Keyword arguments for func

    Returns:
        Result from successful function execution

    Raises:
        Exception: The original error when it is not a rate limit or when
            retries are exhausted
    """
    attempts_remaining = config.max_attempts
    delay = config.base_delay
    attempt = 0

    while True:
        attempt += 1
        try:
            if inspect.iscoroutinefunction(func):
                result = await func(*args, **kwargs)
            else:
                result = func(*args, **kwargs)

            if attempt > 1:
                logger.info(f"Retry succeeded on attempt {attempt}")
            return result

        except asyncio.CancelledError:
            raise

        except Exception as e:
            if not is_rate_limit_error(e):
                raise

            if attempts_remaining <= 0:
                logger.error(f"Rate limited after {config.max_attempts} retries, giving up")
                raise

            retry_number = config.max_attempts - attempts_remaining + 1
            logger.warning(
                f"Rate limited. Retrying in {delay:.2f}s... "
                f"({retry_number}/{config.max_attempts})"
            )
            if on_retry is not None:
                on_retry(retry_number, delay, e)

            await sleep(delay)

            delay = min(delay * config.exponential_base, config.max_delay)
            attempts_remaining -= 1
