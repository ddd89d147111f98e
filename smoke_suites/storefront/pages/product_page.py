"""
================================================================================
Product Detail Page Object (Async / Playwright)
================================================================================

Individual product pages at /products/{slug}.

Product markup and variant taxonomy differ between catalog items, so the
variant/size selection cascades through several selector patterns before
falling back to "click the first available variant", and add-to-cart waits
on a bounded readiness gate instead of blocking.

================================================================================
"""

from __future__ import annotations

import time
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import expect

from smoke_suites.storefront.framework.page_base import PageBase
from smoke_suites.storefront.framework.smart_locator import ElementNotFoundError, SmartLocator
from smoke_suites.storefront.framework.wait_helpers import WaitConfig, poll_until


class ProductPage(PageBase):
    """Product detail page object (async)."""

    ROUTE = "/products/"
    PAGE_NAME = "Product"

    LOCATORS = {
        "product_title": ("[data-testid='product-title']", ".product-title", "h1"),
        "product_price": ("[data-testid='product-price']", ".product-price", ".price"),
        "product_description": (
            "[data-testid='product-description']",
            ".product-description",
            ".description",
        ),
        "product_image": ("[data-testid='product-image']", ".product-image", ".gallery img"),
        "variant_selector": (
            "[data-testid='variant-selector']",
            ".variant-selector",
            ".product-variants",
        ),
        "size_options": (
            "[data-testid='size-option']",
            ".size-option",
            "[data-variant-type='size'] button",
        ),
        "color_options": (
            "[data-testid='color-option']",
            ".color-option",
            "[data-variant-type='color'] button",
        ),
        # Any clickable variant, for products without explicit size data
        "variant_options": (
            "button[data-testid*='variant']",
            "button[data-variant]",
            ".variant-option button",
            ".product-variants button",
            "[role='radiogroup'] button",
            "fieldset button",
        ),
        "add_to_cart": (
            "[data-testid='add-to-cart']",
            ".add-to-cart",
            "button:has-text('Add to Cart')",
            "button:has-text('Add to cart')",
        ),
        "quantity": ("[data-testid='quantity']", ".quantity input", "input[type='number']"),
        "success_indicator": ("[data-success]", ".success", ".added"),
        "breadcrumb": ("[data-testid='breadcrumb']", ".breadcrumb"),
    }

    @staticmethod
    def size_patterns(size: str):
        """Explicit size selectors, most specific first."""
        return (
            f"[data-testid='size-option']:has-text('{size}')",
            f"[data-variant='size']:has-text('{size}')",
            f".size-option:has-text('{size}')",
            f"button:has-text('{size}')",
            f"[data-size='{size}']",
            f"[value='{size}']",
        )

    @allure.step("Open product page")
    async def goto(self, slug: Optional[str] = None) -> None:
        """Navigate to /products/{slug}; without a slug only waits for readiness."""
        if slug:
            await self.navigate(f"{self.ROUTE}{slug}")
        await self.wait_for_page_load()

    @allure.step("Verify product page loaded")
    async def verify_loaded(self) -> None:
        """Hard check: product URL, visible title and price or add-to-cart present."""
        await self.verify_url(r".*/products/.*")
        self.verify_response_ok()

        title = await self.element("product_title").locate(timeout=self.expect_timeout)
        await expect(title).to_be_visible()

        has_price_or_button = (
            await self.element_exists("product_price")
            or await self.element_exists("add_to_cart")
        )
        assert has_price_or_button, "Product page shows neither a price nor an add-to-cart button"

    @allure.step("Verify product information")
    async def verify_product_information(self) -> None:
        title = await self.element("product_title").locate(timeout=self.expect_timeout)
        title_text = (await title.text_content() or "").strip()
        assert title_text, "Product title is empty"

        price = await self.element("product_price").resolve(timeout=self.exists_timeout)
        if price is not None:
            await expect(price).to_be_visible()
            price_text = (await price.text_content() or "").strip()
            assert price_text, "Product price is empty"

    # =========================================================================
    # Variant Selection
    # =========================================================================

    @allure.step("Select size: {size}")
    async def select_size(self, size: str) -> bool:
        """
        Select a size, cascading from explicit size selectors to any variant
        whose text contains `size`, then to the first size option.

        Returns:
            True when something was clicked
        """
        explicit = SmartLocator(self.page, f"size[{size}]", self.size_patterns(size))
        option = await explicit.resolve(timeout=self.exists_timeout)
        if option is not None:
            await self.safe_click(option)
            return True

        container = await self.element("variant_selector").resolve(timeout=self.exists_timeout)
        if container is not None:
            variants = container.locator("button, select option")
            for i in range(await variants.count()):
                variant = variants.nth(i)
                if size in (await variant.text_content() or ""):
                    await self.safe_click(variant)
                    return True

        first_size = await self.element("size_options").resolve(timeout=self.exists_timeout)
        if first_size is not None:
            logger.info(f"Size '{size}' not found, selecting first size option")
            await self.safe_click(first_size)
            return True

        logger.info(f"No size option available for '{size}'")
        return False

    @allure.step("Select color: {color}")
    async def select_color(self, color: str) -> bool:
        option = await self.element("color_options").with_text(color).resolve(
            timeout=self.exists_timeout
        )
        if option is None:
            return False
        await self.safe_click(option)
        return True

    @allure.step("Select any available variant")
    async def select_any_variant(self) -> bool:
        """
        Click the first available variant, trying each variant pattern until
        one click succeeds. Returns False when no variant could be clicked.
        """
        for selector in self.element("variant_options").candidates:
            variant = await SmartLocator(self.page, "variant_option", (selector,)).resolve(timeout=0)
            if variant is None:
                continue
            try:
                await self.safe_click(variant)
            except (ElementNotFoundError, PlaywrightError) as e:
                logger.info(f"Failed to click variant with selector {selector}: {e}")
                continue
            logger.info(f"Selected variant using selector: {selector}")
            return True

        logger.info("No variants found to select")
        return False

    @allure.step("Set quantity: {quantity}")
    async def set_quantity(self, quantity: int) -> bool:
        if not await self.element_exists("quantity"):
            return False
        await self.safe_fill("quantity", str(quantity))
        return True

    # =========================================================================
    # Add to Cart
    # =========================================================================

    async def wait_for_add_to_cart_enabled(self, timeout: int = 0) -> bool:
        """
        Readiness gate: poll until add-to-cart is visible and neither
        `disabled` nor `aria-disabled="true"`.

        Returns:
            False when the gate timed out (callers still attempt the click)
        """
        timeout = timeout or self.config.timeout("add_to_cart_ready", 5000)
        deadline = time.monotonic() + timeout / 1000
        button = await self.element("add_to_cart").resolve(timeout=timeout, state="visible")
        if button is None:
            logger.warning("Add to cart button not visible, trying anyway...")
            return False

        async def enabled() -> bool:
            if not await button.is_visible():
                return False
            if await button.get_attribute("disabled") is not None:
                return False
            return await button.get_attribute("aria-disabled") != "true"

        remaining_ms = max(0, int((deadline - time.monotonic()) * 1000))
        ready = await poll_until(enabled, WaitConfig.from_ms(remaining_ms), "add to cart enabled")
        if not ready:
            logger.warning("Add to cart button may still be disabled, trying anyway...")
        return ready

    @allure.step("Click add to cart")
    async def click_add_to_cart(self) -> bool:
        """
        Click add-to-cart, falling back to a forced click.

        Returns:
            True when a success indicator appeared afterwards
        """
        try:
            await self.safe_click("add_to_cart")
        except (ElementNotFoundError, PlaywrightError) as e:
            logger.info(f"Normal click failed ({type(e).__name__}), trying force click...")
            button = await self.element("add_to_cart").locate(
                timeout=self.action_timeout, state="attached"
            )
            await button.click(force=True, timeout=self.action_timeout)

        confirmed = await self.element("success_indicator").exists(
            timeout=self.config.timeout("success_indicator", 3000)
        )
        if not confirmed:
            logger.info("No success indicator found, continuing...")
        return confirmed

    @allure.step("Add to cart (size={size}, quantity={quantity})")
    async def add_to_cart_with_specs(self, size: Optional[str] = None, quantity: int = 1) -> bool:
        """
        Select a variant, size and quantity where available, then add to cart.

        Returns:
            True when add-to-cart was confirmed by a success indicator
        """
        await self.select_any_variant()

        if size and await self.element_exists("size_options"):
            await self.select_size(size)

        await self.set_quantity(quantity)
        await self.wait_for_add_to_cart_enabled()
        return await self.click_add_to_cart()

    # =========================================================================
    # Readers and Optional Checks
    # =========================================================================

    async def product_title(self) -> str:
        return await self.text_of("product_title")

    async def product_price(self) -> str:
        return await self.text_of("product_price")

    @allure.step("Verify add to cart available")
    async def verify_add_to_cart_available(self) -> None:
        button = await self.element("add_to_cart").locate(timeout=self.expect_timeout)
        await expect(button).to_be_visible()
        await expect(button).to_be_enabled()

    async def verify_variant_options_available(self) -> None:
        selector = await self.element("variant_selector").resolve(timeout=self.exists_timeout)
        if selector is not None:
            await expect(selector).to_be_visible()

    async def verify_product_image(self) -> None:
        image = await self.element("product_image").resolve(timeout=self.exists_timeout)
        if image is not None:
            await expect(image).to_be_visible()


__all__ = ["ProductPage"]
