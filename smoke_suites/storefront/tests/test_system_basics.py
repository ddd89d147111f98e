"""
================================================================================
Storefront System Basics Smoke Tests (Async / Playwright)
================================================================================

Fundamental e-commerce flow:
  1. Homepage loads with products
  2. Product detail page works
  3. Add to cart (tolerated failure)
  4. Cart page is reachable (empty or not)
  5. Checkout page is reachable
  6. All major pages reachable in one journey
  7. Navigation and footer present

Each scenario runs in its own browser session and is never retried.

================================================================================
"""

import allure
import pytest
from loguru import logger

from smoke_suites.storefront.framework.outcome import soft_step
from smoke_suites.storefront.pages.cart_page import CartPage
from smoke_suites.storefront.pages.checkout_page import CheckoutPage
from smoke_suites.storefront.pages.home_page import HomePage
from smoke_suites.storefront.pages.product_page import ProductPage


@allure.epic("Storefront Smoke")
@allure.feature("System Basics")
@pytest.mark.smoke
class TestSystemBasics:
    """Storefront system basics smoke suite (async)."""

    @allure.story("Home")
    @allure.title("TC-001: Storefront homepage loads and displays products")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.asyncio
    async def test_tc001_homepage_loads(self, home_page: HomePage):
        """Homepage answers on the storefront host with products or main content."""
        await home_page.goto()
        await home_page.verify_loaded()

        await home_page.screenshot("homepage-loaded")

    @allure.story("Product")
    @allure.title("TC-002: Product detail page displays after clicking a product")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.asyncio
    async def test_tc002_product_detail(self, home_page: HomePage, product_page: ProductPage):
        with allure.step("Open homepage"):
            await home_page.goto()
            await home_page.verify_loaded()

        with allure.step("Open first product"):
            await home_page.click_first_product()

        with allure.step("Verify product information"):
            await product_page.verify_loaded()
            await product_page.verify_product_information()

        await product_page.screenshot("product-detail-page")

    @allure.story("Cart")
    @allure.title("TC-003: Add to cart")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.e2e
    @pytest.mark.asyncio
    async def test_tc003_add_to_cart(self, home_page: HomePage, product_page: ProductPage, test_data):
        """
        Add-to-cart depends on catalog variants, so its failure is tolerated:
        logged, screenshotted and reported as skipped instead of failed.
        """
        await home_page.goto()
        await home_page.click_first_product()
        await product_page.verify_loaded()

        async with soft_step("add-to-cart", page=home_page) as step:
            confirmed = await product_page.add_to_cart_with_specs(
                test_data["default_size"],
                test_data["default_quantity"],
            )
            logger.info(f"Add to cart confirmed by success indicator: {confirmed}")

            await home_page.goto()
            await home_page.wait_for_cart_badge()
            await home_page.screenshot("cart-updated")

        if not step.passed:
            pytest.skip(f"Add to cart requires product variant selection: {step.detail}")

    @allure.story("Cart")
    @allure.title("TC-004: Cart page is accessible")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.asyncio
    async def test_tc004_cart_page_accessible(self, cart_page: CartPage):
        """Empty and non-empty carts are both valid."""
        await cart_page.goto()
        await cart_page.verify_loaded()

        is_empty = await cart_page.is_empty()
        logger.info(f"Cart is {'empty' if is_empty else 'not empty'} - both states are acceptable")

        await cart_page.screenshot("cart-page-loaded")

    @allure.story("Checkout")
    @allure.title("TC-005: Checkout page is accessible")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.asyncio
    async def test_tc005_checkout_page_accessible(self, checkout_page: CheckoutPage):
        """An empty cart or a login prompt are both acceptable."""
        await checkout_page.goto()
        await checkout_page.verify_loaded()

        await checkout_page.screenshot("checkout-page-accessible")

    @allure.story("Navigation")
    @allure.title("TC-006: Complete navigation journey - all pages accessible")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.e2e
    @pytest.mark.asyncio
    async def test_tc006_navigation_journey(
        self,
        home_page: HomePage,
        product_page: ProductPage,
        cart_page: CartPage,
        checkout_page: CheckoutPage,
    ):
        with allure.step("Homepage"):
            await home_page.goto()
            await home_page.verify_loaded()

        with allure.step("Product"):
            await home_page.click_first_product()
            await product_page.verify_loaded()

        with allure.step("Cart"):
            await cart_page.goto()
            await cart_page.verify_loaded()

        with allure.step("Checkout"):
            await checkout_page.goto()
            await checkout_page.verify_loaded()

        with allure.step("Back to homepage"):
            await home_page.goto()
            await home_page.verify_loaded()

        await home_page.screenshot("complete-navigation-journey-success")

    @allure.story("Navigation")
    @allure.title("TC-007: Basic navigation and UI elements")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.asyncio
    async def test_tc007_ui_elements(self, home_page: HomePage):
        """Navigation and footer are checked only when present."""
        await home_page.goto()
        await home_page.verify_loaded()

        await home_page.verify_navigation_visible()
        await home_page.verify_footer_visible()

        await home_page.screenshot("ui-elements-verification")
