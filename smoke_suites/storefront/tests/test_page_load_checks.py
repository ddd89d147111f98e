"""
================================================================================
Page Load Checks Against Served HTML (Async / Playwright)
================================================================================

Runs each page object's `verify_loaded` in a real browser with every request
answered by `page.route`, so no storefront needs to be running.

Covered:
  - Repeating `verify_loaded` gives the same result
  - Home accepts product cards or only the main content region
  - Empty and non-empty carts both count as loaded
  - A route answering 404 fails the load check

================================================================================
"""

from typing import AsyncGenerator, Dict
from urllib.parse import urlparse

import allure
import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Route

from smoke_suites.storefront.framework.browser_manager import BrowserManager
from smoke_suites.storefront.pages.cart_page import CartPage
from smoke_suites.storefront.pages.checkout_page import CheckoutPage
from smoke_suites.storefront.pages.home_page import HomePage
from smoke_suites.storefront.pages.product_page import ProductPage


BASE_URL = "http://localhost:3000"

NOT_FOUND_HTML = "<html><body><h1>404</h1><p>This page could not be found.</p></body></html>"


def storefront_html(body: str) -> str:
    return (
        "<html><head><title>Storefront</title></head><body>"
        "<nav><a href='/'>Home</a><a href='/cart'>Cart</a></nav>"
        f"{body}"
        "<footer>Storefront footer</footer>"
        "</body></html>"
    )


HOME_WITH_PRODUCTS = storefront_html(
    "<main><ul>"
    "<li><a class='product-card' href='/products/monospace-tee'>Monospace Tee</a></li>"
    "<li><a class='product-card' href='/products/paul-balance'>Paul's Balance 420</a></li>"
    "</ul></main>"
)
HOME_WITHOUT_PRODUCTS = storefront_html("<main><h2>New collection coming soon</h2></main>")
PRODUCT = storefront_html(
    "<main><h1>Monospace Tee</h1><span class='price'>$20.00</span>"
    "<button>Add to cart</button></main>"
)
EMPTY_CART = storefront_html(
    "<main><h1>Shopping Cart</h1><p class='empty-cart'>Your cart is empty</p></main>"
)
CART_WITH_ITEMS = storefront_html(
    "<main><h1>Shopping Cart</h1>"
    "<div class='cart-item'><h3>Monospace Tee</h3><span class='item-price'>$20.00</span></div>"
    "<div class='cart-summary'><span class='cart-total'>$20.00</span></div></main>"
)
CHECKOUT = storefront_html(
    "<main><h1>Checkout</h1><a href='/login'>Sign in</a></main>"
)


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture
async def offline_page() -> AsyncGenerator[Page, None]:
    """Browser page with no storefront behind it."""
    manager = BrowserManager()
    try:
        await manager.start()
    except PlaywrightError as e:
        await manager.close()
        pytest.skip(f"environment precondition: {manager.browser_type} unavailable ({e})")

    try:
        yield await manager.new_page()
    finally:
        await manager.close()


@pytest.fixture
async def served_pages(offline_page: Page) -> Dict[str, str]:
    """
    Path -> HTML served for every request of `offline_page`.

    Paths missing from the mapping answer 404.
    """
    pages: Dict[str, str] = {}

    async def fulfill(route: Route) -> None:
        body = pages.get(urlparse(route.request.url).path)
        if body is None:
            await route.fulfill(status=404, content_type="text/html", body=NOT_FOUND_HTML)
        else:
            await route.fulfill(status=200, content_type="text/html", body=body)

    await offline_page.route("**/*", fulfill)
    return pages


# ================================================================================
# Tests
# ================================================================================

@allure.epic("Storefront Smoke")
@allure.feature("Page Load Checks")
@pytest.mark.P1
class TestPageLoadChecks:
    """Load checks of every page object against served HTML."""

    @allure.title("Home with product cards is loaded, twice in a row")
    @pytest.mark.asyncio
    async def test_home_with_products_loaded(self, offline_page, served_pages):
        served_pages["/"] = HOME_WITH_PRODUCTS
        home = HomePage(offline_page, BASE_URL)

        await home.goto()
        await home.verify_loaded()
        await home.verify_loaded()

        assert await home.element("product_cards").count() == 2

    @allure.title("Home with only the main content region is loaded")
    @pytest.mark.asyncio
    async def test_home_with_main_content_only_loaded(self, offline_page, served_pages):
        served_pages["/"] = HOME_WITHOUT_PRODUCTS
        home = HomePage(offline_page, BASE_URL)

        await home.goto()
        await home.verify_loaded()
        await home.verify_loaded()

        assert not await home.element_exists("product_cards")

    @allure.title("Product page is loaded, twice in a row")
    @pytest.mark.asyncio
    async def test_product_page_loaded(self, offline_page, served_pages):
        served_pages["/products/monospace-tee"] = PRODUCT
        product = ProductPage(offline_page, BASE_URL)

        await product.goto("monospace-tee")
        await product.verify_loaded()
        await product.verify_loaded()

        assert await product.product_title() == "Monospace Tee"

    @allure.title("Empty cart is loaded")
    @pytest.mark.asyncio
    async def test_empty_cart_loaded(self, offline_page, served_pages):
        served_pages["/cart"] = EMPTY_CART
        cart = CartPage(offline_page, BASE_URL)

        await cart.goto()
        await cart.verify_loaded()
        await cart.verify_loaded()

        assert await cart.is_empty() is True

    @allure.title("Cart with items is loaded")
    @pytest.mark.asyncio
    async def test_cart_with_items_loaded(self, offline_page, served_pages):
        served_pages["/cart"] = CART_WITH_ITEMS
        cart = CartPage(offline_page, BASE_URL)

        await cart.goto()
        await cart.verify_loaded()
        await cart.verify_loaded()

        assert await cart.is_empty() is False
        assert await cart.item_names() == ["Monospace Tee"]

    @allure.title("Checkout page is loaded, twice in a row")
    @pytest.mark.asyncio
    async def test_checkout_page_loaded(self, offline_page, served_pages):
        served_pages["/checkout"] = CHECKOUT
        checkout = CheckoutPage(offline_page, BASE_URL)

        await checkout.goto()
        await checkout.verify_loaded()
        await checkout.verify_loaded()

    @allure.title("Missing cart route fails the cart load check every time")
    @pytest.mark.asyncio
    async def test_missing_cart_route_fails_load_check(self, offline_page, served_pages):
        served_pages["/"] = HOME_WITH_PRODUCTS
        cart = CartPage(offline_page, BASE_URL)

        await cart.goto()

        for _ in range(2):
            with pytest.raises(AssertionError, match="HTTP 404"):
                await cart.verify_loaded()
