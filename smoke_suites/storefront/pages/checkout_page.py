"""
================================================================================
Checkout Page Object (Async / Playwright)
================================================================================

Checkout at /checkout. Sections (shipping, billing, delivery) depend on the
session state, so their checks only run when the section is present.

================================================================================
"""

from __future__ import annotations

import re

import allure
from playwright.async_api import expect

from smoke_suites.storefront.framework.page_base import PageBase


ORDER_NUMBER_PATTERN = re.compile(r"Order #?(\w+)", re.IGNORECASE)
CONFIRMATION_KEYWORDS = ("confirmed", "order", "success")


class CheckoutPage(PageBase):
    """Checkout page object (async)."""

    ROUTE = "/checkout"
    PAGE_NAME = "Checkout"

    LOCATORS = {
        "checkout_title": (
            "[data-testid='checkout-title']",
            ".checkout-title",
            "h1:has-text('Checkout')",
        ),
        "login_section": ("[data-testid='login-section']", ".login-section", ".checkout-login"),
        "sign_in": (
            "[data-testid='sign-in']",
            ".sign-in",
            "a:has-text('Sign in')",
            "button:has-text('Sign in')",
        ),
        "sign_out": (
            "[data-testid='sign-out']",
            ".sign-out",
            "a:has-text('Sign out')",
            "button:has-text('Sign out')",
        ),
        "email_input": ("[data-testid='email']", "input[type='email']", "input[name='email']"),
        "password_input": (
            "[data-testid='password']",
            "input[type='password']",
            "input[name='password']",
        ),
        "login_button": (
            "[data-testid='login-button']",
            ".login-button",
            "button:has-text('Login')",
            "button[type='submit']",
        ),
        "shipping_address": (
            "[data-testid='shipping-address']",
            ".shipping-address",
            "text=Shipping address",
        ),
        "billing_address": (
            "[data-testid='billing-address']",
            ".billing-address",
            "text=Billing address",
        ),
        "delivery_methods": (
            "[data-testid='delivery-methods']",
            ".delivery-methods",
            "text=Delivery methods",
        ),
        "payment": ("[data-testid='payment']", ".payment-section", "text=Payment"),
        "order_summary": ("[data-testid='order-summary']", ".order-summary", ".summary"),
        "make_payment": (
            "[data-testid='make-payment']",
            ".make-payment",
            "button:has-text('Make payment')",
            "button:has-text('Place order')",
        ),
        "order_confirmation": (
            "[data-testid='order-confirmation']",
            ".order-confirmation",
            "text=/order.*confirmed/i",
        ),
    }

    @allure.step("Open checkout page")
    async def goto(self) -> None:
        await self.navigate()
        await self.wait_for_page_load()

    @allure.step("Verify checkout page loaded")
    async def verify_loaded(self) -> None:
        await self.verify_url(r".*/checkout.*")
        self.verify_response_ok()
        await self.wait_for_page_load()

    # =========================================================================
    # Authentication
    # =========================================================================

    @allure.step("Verify sign in link displayed")
    async def verify_sign_in_link_displayed(self) -> None:
        link = await self.element("sign_in").locate(timeout=self.expect_timeout)
        await expect(link).to_be_visible()

    @allure.step("Click sign in")
    async def click_sign_in(self) -> None:
        await self.safe_click("sign_in")
        await self.wait_for_page_load()

    @allure.step("Login as {email}")
    async def login(self, email: str, password: str) -> None:
        await self.safe_fill("email_input", email)
        await self.safe_fill("password_input", password)
        await self.safe_click("login_button")
        await self.wait_for_page_load()

    @allure.step("Verify user logged in")
    async def verify_user_logged_in(self) -> None:
        """Sign-out visible when present, and the login form no longer shown."""
        sign_out = await self.element("sign_out").resolve(timeout=self.exists_timeout)
        if sign_out is not None:
            await expect(sign_out).to_be_visible()

        email = await self.element("email_input").resolve(timeout=self.exists_timeout)
        if email is not None:
            assert not await email.is_visible(), "Login form is still visible"

    # =========================================================================
    # Sections (checked only when present)
    # =========================================================================

    async def _verify_optional(self, name: str) -> bool:
        section = await self.element(name).resolve(timeout=self.exists_timeout)
        if section is None:
            return False
        await expect(section).to_be_visible()
        return True

    async def verify_shipping_address_section(self) -> bool:
        return await self._verify_optional("shipping_address")

    async def verify_billing_address_section(self) -> bool:
        return await self._verify_optional("billing_address")

    async def verify_delivery_methods_section(self) -> bool:
        return await self._verify_optional("delivery_methods")

    @allure.step("Verify order summary")
    async def verify_order_summary(self) -> None:
        summary = await self.element("order_summary").locate(timeout=self.expect_timeout)
        await expect(summary).to_be_visible()

    @allure.step("Verify order summary contains: {item_name}")
    async def verify_order_summary_contains_item(self, item_name: str) -> None:
        summary = await self.element("order_summary").locate(timeout=self.expect_timeout)
        await expect(summary).to_contain_text(item_name)

    # =========================================================================
    # Payment and Confirmation
    # =========================================================================

    @allure.step("Verify make payment available")
    async def verify_make_payment_available(self) -> None:
        button = await self.element("make_payment").locate(timeout=self.expect_timeout)
        await expect(button).to_be_visible()
        await expect(button).to_be_enabled()

    @allure.step("Click make payment")
    async def click_make_payment(self) -> None:
        await self.safe_click("make_payment")
        await self.wait_for_page_load()

    @allure.step("Verify order confirmation")
    async def verify_order_confirmation(self) -> None:
        confirmation = await self.element("order_confirmation").locate(timeout=self.expect_timeout)
        await expect(confirmation).to_be_visible()

        text = (await confirmation.text_content() or "").lower()
        assert any(keyword in text for keyword in CONFIRMATION_KEYWORDS), (
            f"Confirmation text has no confirmation keyword: {text!r}"
        )

    async def order_number(self) -> str:
        """Order number from the confirmation text, empty when not shown."""
        text = await self.text_of("order_confirmation")
        match = ORDER_NUMBER_PATTERN.search(text)
        return match.group(1) if match else ""

    @allure.step("Complete checkout as logged-in user")
    async def complete_checkout_as_logged_in_user(self) -> None:
        await self.verify_order_summary()
        await self.wait_for_page_load()
        if await self.element_exists("make_payment"):
            await self.click_make_payment()

    @allure.step("Verify checkout form for logged-in user")
    async def verify_checkout_form_for_logged_in_user(self) -> None:
        await self.verify_order_summary()
        await self.verify_shipping_address_section()
        await self.verify_delivery_methods_section()
        await self.verify_make_payment_available()

    @allure.step("Verify checkout elements")
    async def verify_checkout_elements(self) -> None:
        """Order summary always; shipping, delivery and payment when present."""
        await self.verify_order_summary()
        await self.verify_shipping_address_section()
        await self.verify_delivery_methods_section()
        if await self.element_exists("make_payment"):
            await self.verify_make_payment_available()


__all__ = ["CheckoutPage"]
