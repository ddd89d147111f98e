"""
================================================================================
Storefront Smoke Pytest Configuration
================================================================================

Fixtures for browser sessions, page objects and scenario teardown.

Key Features:
- Storefront pre-flight: scenarios skip (environment precondition) when the
  storefront is unreachable instead of failing one by one
- One browser session per scenario, nothing shared
- Page Object fixtures for all storefront pages
- Failure capture (screenshot, URL, console log) into the Allure report

================================================================================
"""

from typing import Any, AsyncGenerator, Dict

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, expect

from smoke_suites.storefront.framework.browser_manager import BrowserManager
from smoke_suites.storefront.framework.config_loader import ConfigLoader
from smoke_suites.storefront.framework.page_base import BasePage
from smoke_suites.storefront.pages.cart_page import CartPage
from smoke_suites.storefront.pages.checkout_page import CheckoutPage
from smoke_suites.storefront.pages.home_page import HomePage
from smoke_suites.storefront.pages.product_page import ProductPage
from smoke_tools.preflight import StorefrontUnavailableError, ensure_storefront


# ================================================================================
# Environment Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture(scope="session")
def storefront_ready(config: ConfigLoader) -> str:
    """
    Session-scoped pre-flight check.

    Skips every browser scenario with an environment-precondition reason when
    the storefront does not answer, and applies the assertion timeout.
    """
    base_url = config.get("storefront.base_url", "http://localhost:3000")
    try:
        ensure_storefront(base_url)
    except StorefrontUnavailableError as e:
        pytest.skip(f"environment precondition: storefront unavailable ({e})")

    expect.set_options(timeout=config.timeout("expect", 5000))
    return base_url


@pytest.fixture(scope="session")
def test_data(config: ConfigLoader) -> Dict[str, Any]:
    """
    Provides common test data for storefront scenarios.
    """
    defaults = {
        "user_email": "admin@example.com",
        "user_password": "admin",
        "default_size": "S",
        "default_quantity": 1,
        "sample_product": "Monospace Tee",
    }
    return {
        key: config.get(f"test_data.{key}", default)
        for key, default in {**defaults, **config.get_section("test_data")}.items()
    }


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager(storefront_ready: str) -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager fixture.

    Every scenario launches its own browser, so no cart or session state
    crosses scenario boundaries.
    """
    async with BrowserManager() as manager:
        yield manager


@pytest.fixture
async def page(request, browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Captures failure details before the session is torn down.
    """
    page = await browser_manager.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            await BasePage(page).capture_failure(request.node.name)
        except PlaywrightError as e:
            logger.warning(f"Failed to capture failure details: {e}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def home_page(page: Page, storefront_ready: str) -> HomePage:
    return HomePage(page, storefront_ready)


@pytest.fixture
def product_page(page: Page, storefront_ready: str) -> ProductPage:
    return ProductPage(page, storefront_ready)


@pytest.fixture
def cart_page(page: Page, storefront_ready: str) -> CartPage:
    return CartPage(page, storefront_ready)


@pytest.fixture
def checkout_page(page: Page, storefront_ready: str) -> CheckoutPage:
    return CheckoutPage(page, storefront_ready)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase report on the item.

    The `page` fixture reads `rep_call` during teardown to decide whether to
    capture failure details while the browser is still open.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
