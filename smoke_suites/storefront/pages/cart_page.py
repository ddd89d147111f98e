"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================

Shopping cart at /cart. An empty cart is a valid loaded state: the smoke
suite only proves the route renders.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger
from playwright.async_api import expect

from smoke_suites.storefront.framework.page_base import PageBase


class CartPage(PageBase):
    """Cart page object (async)."""

    ROUTE = "/cart"
    PAGE_NAME = "Cart"

    LOCATORS = {
        "cart_title": (
            "[data-testid='cart-title']",
            ".cart-title",
            "h1:has-text('Cart')",
            "h1:has-text('Shopping')",
        ),
        "cart_items": ("[data-testid='cart-item']", ".cart-item", ".cart-line-item"),
        "item_name": (
            "[data-testid='cart-item-name']",
            ".cart-item-name",
            ".item-name",
            "h3",
            "h4",
        ),
        "item_price": ("[data-testid='cart-item-price']", ".cart-item-price", ".item-price"),
        "item_quantity": (
            "[data-testid='cart-item-quantity']",
            ".cart-item-quantity",
            ".quantity input",
        ),
        "cart_total": ("[data-testid='cart-total']", ".cart-total", ".total"),
        "checkout_button": (
            "[data-testid='checkout']",
            ".checkout-button",
            "button:has-text('Checkout')",
        ),
        "continue_shopping": (
            "[data-testid='continue-shopping']",
            ".continue-shopping",
            "button:has-text('Continue')",
        ),
        "empty_cart_message": (
            "[data-testid='empty-cart']",
            ".empty-cart",
            "text=/cart is empty/i",
            "text=/no items/i",
        ),
        "remove_item": ("[data-testid='remove-item']", ".remove-item", "button:has-text('Remove')"),
        "update_quantity": (
            "[data-testid='update-quantity']",
            ".update-quantity",
            "button:has-text('Update')",
        ),
        "cart_summary": ("[data-testid='cart-summary']", ".cart-summary", ".summary"),
    }

    @allure.step("Open cart page")
    async def goto(self) -> None:
        await self.navigate()
        await self.wait_for_page_load()

    @allure.step("Verify cart page loaded")
    async def verify_loaded(self) -> None:
        """Hard check: URL on /cart and the route answered; contents are not checked."""
        await self.verify_url(r".*/cart.*")
        self.verify_response_ok()
        await self.wait_for_page_load()

    # =========================================================================
    # Contents
    # =========================================================================

    async def item_count(self) -> int:
        return await self.element("cart_items").count()

    async def is_empty(self) -> bool:
        """Empty when the empty-state message is shown OR no line items exist."""
        if await self.element_exists("empty_cart_message"):
            return True
        return await self.item_count() == 0

    async def item_names(self) -> List[str]:
        """Names of the cart lines, read inside each line."""
        items = await self.element("cart_items").resolve_all(timeout=0)
        if items is None:
            return []

        names = []
        for i in range(await items.count()):
            name = await self.element("item_name").within(items.nth(i)).resolve(timeout=0)
            if name is None:
                continue
            text = (await name.text_content() or "").strip()
            if text:
                names.append(text)
        return names

    async def total_price(self) -> str:
        return await self.text_of("cart_total")

    @allure.step("Verify cart has items")
    async def verify_has_items(self) -> None:
        assert not await self.is_empty(), "Cart is empty"
        first_item = await self.element("cart_items").locate(timeout=self.expect_timeout)
        await expect(first_item).to_be_visible()

    @allure.step("Verify item in cart: {item_name}")
    async def verify_item_in_cart(self, item_name: str) -> None:
        item = await self.element("cart_items").with_text(item_name).locate(
            timeout=self.expect_timeout
        )
        await expect(item).to_be_visible()

    async def verify_item_information(self, expected_item_name: str = "") -> None:
        await self.verify_has_items()
        if expected_item_name:
            await self.verify_item_in_cart(expected_item_name)

    @allure.step("Verify cart summary")
    async def verify_summary(self) -> None:
        summary = await self.element("cart_summary").resolve(timeout=self.exists_timeout)
        if summary is not None:
            await expect(summary).to_be_visible()

        if not await self.is_empty():
            await self.verify_checkout_button_available()

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Click checkout")
    async def click_checkout(self) -> None:
        await self.safe_click("checkout_button")

    @allure.step("Verify checkout button available")
    async def verify_checkout_button_available(self) -> None:
        button = await self.element("checkout_button").locate(timeout=self.expect_timeout)
        await expect(button).to_be_visible()
        await expect(button).to_be_enabled()

    @allure.step("Continue shopping")
    async def continue_shopping(self) -> bool:
        if not await self.element_exists("continue_shopping"):
            return False
        await self.safe_click("continue_shopping")
        return True

    @allure.step("Remove first item")
    async def remove_first_item(self) -> bool:
        if not await self.element_exists("remove_item"):
            logger.info("No remove button in cart")
            return False
        await self.safe_click("remove_item")
        await self.wait_for_page_load()
        return True

    @allure.step("Update item {item_index} quantity to {quantity}")
    async def update_item_quantity(self, item_index: int, quantity: int) -> bool:
        """Set the quantity of one cart line. Returns False when the line has no input."""
        inputs = await self.element("item_quantity").resolve_all(timeout=self.exists_timeout)
        if inputs is None or await inputs.count() <= item_index:
            return False

        await self.safe_fill(inputs.nth(item_index), str(quantity))

        if await self.element_exists("update_quantity"):
            await self.safe_click("update_quantity")
            await self.wait_for_page_load()
        return True


__all__ = ["CartPage"]
