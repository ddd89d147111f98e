"""
================================================================================
Base Page Object
================================================================================

Foundation class for the storefront Page Object Model.

Provides:
    - Route navigation with DOM-content-loaded readiness (no network idle)
    - Named element resolution through SmartLocator fallback chains
    - Safe click / safe fill (hard failures) and existence probes (never raise)
    - URL-pattern and HTTP status verification
    - Full-page timestamped screenshots and failure capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import weakref
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Pattern, Tuple, Union

import allure
from loguru import logger
from playwright.async_api import Locator, Page, Response, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config_loader import ConfigLoader
from .diagnostics import ConsoleCapture, ResponseCapture
from .smart_locator import SmartLocator, health_report


ElementRef = Union[str, SmartLocator, Locator]

# One capture pair per browser page, shared by every page object bound to it
_CAPTURES: "weakref.WeakKeyDictionary[Page, Tuple[ConsoleCapture, ResponseCapture]]" = (
    weakref.WeakKeyDictionary()
)


def _captures_for(page: Page) -> Tuple[ConsoleCapture, ResponseCapture]:
    if page not in _CAPTURES:
        _CAPTURES[page] = (ConsoleCapture(page), ResponseCapture(page))
    return _CAPTURES[page]


class BasePage:
    """
    Base class for all storefront page objects.

    Subclasses declare their route and element fallback chains:

        class CartPage(BasePage):
            ROUTE = "/cart"
            LOCATORS = {
                "checkout_button": (
                    "[data-testid='checkout']",
                    ".checkout-button",
                    "button:has-text('Checkout')",
                ),
            }

            async def goto(self) -> None:
                await self.navigate()

            async def verify_loaded(self) -> None:
                await self.verify_url(r".*/cart.*")

    Capability interface every page implements: goto(), verify_loaded(),
    wait_for_page_load(), screenshot().
    """

    # Override in subclasses
    ROUTE: str = "/"
    PAGE_NAME: str = "page"
    LOCATORS: Dict[str, Tuple[str, ...]] = {}

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Storefront base URL (defaults to `storefront.base_url`)
            config: Configuration loader (defaults to the shared instance)
        """
        self.page = page
        self.config = config or ConfigLoader()
        if not base_url:
            base_url = self.config.get("storefront.base_url", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")

        self.action_timeout = self.config.timeout("action", 5000)
        self.navigation_timeout = self.config.timeout("navigation", 15000)
        self.exists_timeout = self.config.timeout("exists", 2000)
        self.expect_timeout = self.config.timeout("expect", 5000)

        self.console, self.responses = _captures_for(page)
        self.last_response: Optional[Response] = None
        self._elements: Dict[str, SmartLocator] = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"

    @property
    def url(self) -> str:
        """Full URL of this page's route."""
        return f"{self.base_url}{self.ROUTE}"

    @property
    def current_url(self) -> str:
        return self.page.url

    # =========================================================================
    # Capability Interface
    # =========================================================================

    async def goto(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement goto()")

    async def verify_loaded(self) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement verify_loaded()")

    # =========================================================================
    # Element Resolution
    # =========================================================================

    def element(self, name: str) -> SmartLocator:
        """
        SmartLocator for a named element declared in LOCATORS.

        Raises:
            KeyError: When the page declares no such element
        """
        if name not in self._elements:
            if name not in self.LOCATORS:
                raise KeyError(f"{type(self).__name__} has no locator named '{name}'")
            self._elements[name] = SmartLocator(self.page, name, self.LOCATORS[name])
        return self._elements[name]

    def _smart(self, target: Union[str, SmartLocator]) -> SmartLocator:
        return self.element(target) if isinstance(target, str) else target

    async def _to_locator(self, target: ElementRef, timeout: int) -> Locator:
        if isinstance(target, (str, SmartLocator)):
            return await self._smart(target).locate(timeout=timeout)
        await target.wait_for(state="visible", timeout=timeout)
        return target

    # =========================================================================
    # Navigation and Readiness
    # =========================================================================

    async def navigate(self, path: Optional[str] = None) -> Optional[Response]:
        """
        Navigate to `path` (defaults to ROUTE) and wait for DOM content.

        Navigation timeouts propagate as hard failures.
        """
        target = f"{self.base_url}{self.ROUTE if path is None else path}"
        with allure.step(f"Navigate to {target}"):
            response = await self.page.goto(
                target,
                wait_until="domcontentloaded",
                timeout=self.navigation_timeout,
            )
        self.last_response = response
        status = response.status if response is not None else "n/a"
        logger.debug(f"Navigated to: {target} (status={status})")
        return response

    async def wait_for_page_load(
        self,
        state: str = "domcontentloaded",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait for the page to reach a load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in milliseconds
        """
        await self.page.wait_for_load_state(state, timeout=timeout or self.navigation_timeout)

    # =========================================================================
    # Safe Interactions (hard failures)
    # =========================================================================

    async def safe_click(
        self,
        target: ElementRef,
        timeout: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """
        Wait for the element to be visible, then click it.

        Raises:
            ElementNotFoundError: No candidate became visible
            playwright TimeoutError: The click itself timed out
        """
        timeout = timeout or self.action_timeout
        with allure.step(f"Click: {self._describe(target)}"):
            locator = await self._to_locator(target, timeout)
            await locator.click(timeout=timeout, **kwargs)

    async def safe_fill(
        self,
        target: ElementRef,
        value: str,
        timeout: Optional[int] = None,
    ) -> None:
        """Wait for the input to be visible, then set its value."""
        timeout = timeout or self.action_timeout
        shown = "*" * len(value) if "password" in self._describe(target).lower() else value
        with allure.step(f"Fill {self._describe(target)}: {shown}"):
            locator = await self._to_locator(target, timeout)
            await locator.fill(value, timeout=timeout)

    # =========================================================================
    # Probes (never raise)
    # =========================================================================

    async def element_exists(
        self,
        target: ElementRef,
        timeout: Optional[int] = None,
    ) -> bool:
        """True when the element is attached within the (short) timeout."""
        timeout = self.exists_timeout if timeout is None else timeout
        if isinstance(target, (str, SmartLocator)):
            return await self._smart(target).exists(timeout=timeout)
        try:
            await target.wait_for(state="attached", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    async def is_visible(
        self,
        target: ElementRef,
        timeout: Optional[int] = None,
    ) -> bool:
        """True when the element becomes visible within the timeout."""
        timeout = self.exists_timeout if timeout is None else timeout
        if isinstance(target, (str, SmartLocator)):
            return await self._smart(target).resolve(timeout=timeout, state="visible") is not None
        try:
            await target.wait_for(state="visible", timeout=timeout)
            return True
        except PlaywrightTimeoutError:
            return False

    async def text_of(
        self,
        target: Union[str, SmartLocator],
        timeout: Optional[int] = None,
    ) -> str:
        """Stripped text of an optional element, empty when absent."""
        timeout = self.exists_timeout if timeout is None else timeout
        locator = await self._smart(target).resolve(timeout=timeout)
        if locator is None:
            return ""
        return (await locator.text_content() or "").strip()

    # =========================================================================
    # Verification (hard failures)
    # =========================================================================

    async def verify_url(self, pattern: Union[str, Pattern[str]]) -> None:
        """Assert the current location matches `pattern` (regex)."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        with allure.step(f"Verify URL matches {regex.pattern}"):
            await expect(self.page).to_have_url(regex, timeout=self.expect_timeout)

    def verify_response_ok(self) -> None:
        """
        Assert the last navigation made by this page object was not an HTTP error.

        A missing route keeps the requested URL but answers 404, so the URL
        check alone cannot detect it.
        """
        if self.last_response is None:
            return
        status = self.last_response.status
        assert status < 400, (
            f"{self.PAGE_NAME} answered HTTP {status} for {self.last_response.url}"
        )

    async def title(self) -> str:
        return await self.page.title()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def screenshot_dir(self) -> Path:
        return Path(self.config.get("artifacts.screenshot_dir", "test-results/screenshots"))

    async def screenshot(
        self,
        name: str,
        full_page: bool = True,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Save a full-page screenshot as `<name>-<timestamp>.png`.

        Returns:
            Path to saved screenshot
        """
        directory = self.screenshot_dir()
        directory.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
        filepath = directory / f"{name}-{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on scenario failure.

        Saves:
            - Screenshot
            - Current URL
            - Console log
            - Failed responses
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure-{test_name}")

            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )
            if self.console.entries:
                allure.attach(
                    self.console.to_text(),
                    name="Console Log",
                    attachment_type=allure.attachment_type.TEXT,
                )
            if self.responses.entries:
                allure.attach(
                    self.responses.to_json(),
                    name="Failed Responses",
                    attachment_type=allure.attachment_type.JSON,
                )

    def locator_health_report(self) -> str:
        """Report of elements on this page that resolved through a fallback."""
        return health_report(list(self._elements.values()))

    @staticmethod
    def _describe(target: ElementRef) -> str:
        if isinstance(target, str):
            return target
        if isinstance(target, SmartLocator):
            return target.element_name
        return "locator"


__all__ = [
    "BasePage",
    "PageBase",
    "ElementRef",
]

# Page objects use the PageBase name
PageBase = BasePage
