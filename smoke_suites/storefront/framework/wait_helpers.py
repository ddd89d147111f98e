# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Bounded polling for UI readiness gates (e.g. "add to cart is enabled").
#
# Key Features:
#   - Fixed-interval async polling against a deadline
#   - Raising (wait_until) and non-raising (poll_until) variants
#   - Playwright errors inside a check count as "not yet"
#
# Usage:
#   ready = await poll_until(button_enabled, WaitConfig(timeout=5.0), "add to cart enabled")
#
# ================================================================================

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, TypeVar

from loguru import logger
from playwright.async_api import Error as PlaywrightError


T = TypeVar("T")


@dataclass
class WaitConfig:
    """
    Configuration for polling.

    Attributes:
        interval: Delay between checks in seconds
        timeout: Total budget in seconds
    """
    interval: float = 0.25
    timeout: float = 5.0

    @classmethod
    def from_ms(cls, timeout_ms: int, interval: float = 0.25) -> "WaitConfig":
        return cls(interval=interval, timeout=timeout_ms / 1000)


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""
    pass


async def wait_until(
    check_fn: Callable[[], Awaitable[Tuple[bool, T]]],
    config: Optional[WaitConfig] = None,
    description: str = "Waiting for condition",
) -> T:
    """
    Poll `check_fn` until it reports success.

    Args:
        check_fn: Coroutine function returning (success, result)
        config: Interval/timeout settings
        description: Human-readable description for logging

    Returns:
        Result from check_fn when successful

    Raises:
        WaitTimeoutError: If the timeout is reached without success
    """
    config = config or WaitConfig()
    start_time = time.monotonic()
    attempt = 0
    last_result = None
    last_error = None

    while True:
        attempt += 1
        try:
            success, result = await check_fn()
            last_result = result
            if success:
                logger.debug(
                    f"Wait successful after {attempt} attempts "
                    f"({time.monotonic() - start_time:.1f}s): {description}"
                )
                return result
        except PlaywrightError as e:
            last_error = str(e)
            logger.debug(f"Attempt {attempt} failed with error: {e}")

        elapsed = time.monotonic() - start_time
        if elapsed >= config.timeout:
            error_msg = (
                f"Timeout after {elapsed:.1f}s waiting for: {description}. "
                f"Last result: {last_result}, Last error: {last_error}"
            )
            raise WaitTimeoutError(error_msg)

        await asyncio.sleep(min(config.interval, config.timeout - elapsed))


async def poll_until(
    check_fn: Callable[[], Awaitable[bool]],
    config: Optional[WaitConfig] = None,
    description: str = "Waiting for condition",
) -> bool:
    """
    Poll a boolean check, returning False instead of raising on timeout.
    """
    async def wrapped() -> Tuple[bool, bool]:
        ok = await check_fn()
        return ok, ok

    try:
        return await wait_until(wrapped, config, description)
    except WaitTimeoutError as e:
        logger.debug(str(e))
        return False


__all__ = [
    "WaitConfig",
    "WaitTimeoutError",
    "wait_until",
    "poll_until",
]
