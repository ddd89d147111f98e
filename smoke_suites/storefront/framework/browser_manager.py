"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for storefront smoke scenarios.

Features:
    - One Playwright instance, browser and context per scenario
    - Launch/context options built from config (browser.*, timeouts.*)
    - Per-context default action and navigation timeouts

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .config_loader import ConfigLoader


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages one isolated browser session.

    Sessions are never shared between scenarios: no cart, cookie or login
    state leaks from one test into another.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("http://localhost:3000")
    """

    DEFAULT_LAUNCH_ARGS: List[str] = [
        "--ignore-certificate-errors",
    ]

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (defaults to `browser.headless`)
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to `browser.name`)
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.headless = (
            bool(self.config.get("browser.headless", True)) if headless is None else headless
        )
        self.browser_type = browser_type or self.config.get("browser.name", "chromium")
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{self.browser_type}', expected one of {SUPPORTED_BROWSERS}"
            )

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    def launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "headless": self.headless,
        }
        if self.browser_type == "chromium":
            options["args"] = list(self.DEFAULT_LAUNCH_ARGS)
            channel = self.config.get("browser.channel", "")
            if channel:
                options["channel"] = channel
        return options

    def context_options(self) -> Dict[str, Any]:
        return {
            "base_url": self.config.get("storefront.base_url", "http://localhost:3000"),
            "viewport": {
                "width": int(self.config.get("browser.viewport_width", 1280)),
                "height": int(self.config.get("browser.viewport_height", 720)),
            },
            "user_agent": self.config.get("browser.user_agent", "Storefront-SmokeTest-Bot/1.0"),
            "ignore_https_errors": bool(self.config.get("browser.ignore_https_errors", True)),
        }

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.browser_type)

        self._browser = await browser_launcher.launch(**self.launch_options())
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, cart.

        Args:
            **options: Overrides for the configured context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {**self.context_options(), **options}
        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(self.config.timeout("action", 5000))
        context.set_default_navigation_timeout(self.config.timeout("navigation", 15000))
        self._contexts.append(context)

        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for new context

        Returns:
            New Page
        """
        if context is None:
            context = await self.new_context(**context_options)

        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]
