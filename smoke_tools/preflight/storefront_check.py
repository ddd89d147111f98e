"""
================================================================================
Storefront Reachability Check
================================================================================

Verifies the storefront answers HTTP before any browser is launched.

Features:
- Async probe with httpx (redirects followed)
- Server errors and connection failures count as unreachable
- Sync wrapper for the CLI runner

================================================================================
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import httpx
from loguru import logger

from smoke_suites.storefront.framework.config_loader import ConfigLoader


class StorefrontUnavailableError(Exception):
    """Raised when the storefront cannot serve the smoke suite."""
    pass


@dataclass
class PreflightResult:
    """
    Outcome of one reachability probe.

    Attributes:
        url: Probed URL
        reachable: True when the storefront answered below HTTP 500
        status_code: HTTP status, None when no response was received
        error: Transport error description
    """
    url: str
    reachable: bool
    status_code: Optional[int] = None
    error: str = ""

    def describe(self) -> str:
        if self.status_code is not None:
            return f"{self.url} answered HTTP {self.status_code}"
        return f"{self.url} unreachable: {self.error}"


async def probe_storefront(base_url: str, timeout: float = 5.0) -> PreflightResult:
    """
    Request the storefront root once.

    Args:
        base_url: Storefront base URL
        timeout: Request timeout in seconds

    Returns:
        PreflightResult (never raises for transport errors)
    """
    url = base_url.rstrip("/") + "/"
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.debug(f"Pre-flight request failed: {e!r}")
            return PreflightResult(url=url, reachable=False, error=type(e).__name__)

    return PreflightResult(
        url=url,
        reachable=response.status_code < 500,
        status_code=response.status_code,
    )


async def check_storefront(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> PreflightResult:
    """
    Probe the storefront and fail loudly when it cannot be used.

    Raises:
        StorefrontUnavailableError: Connection failure or HTTP 5xx
    """
    config = ConfigLoader()
    base_url = base_url or config.get("storefront.base_url", "http://localhost:3000")
    timeout = timeout or config.get("preflight.timeout", 5)

    result = await probe_storefront(base_url, timeout=timeout)
    if not result.reachable:
        logger.error(f"❌ Storefront pre-flight failed: {result.describe()}")
        raise StorefrontUnavailableError(result.describe())

    logger.info(f"✅ Storefront reachable: {result.describe()}")
    return result


def ensure_storefront(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> PreflightResult:
    """Synchronous wrapper around check_storefront (for the CLI runner)."""
    return asyncio.run(check_storefront(base_url, timeout))
