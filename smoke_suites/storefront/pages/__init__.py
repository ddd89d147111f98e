"""
================================================================================
Storefront Page Objects
================================================================================

Page Object Model implementations for the storefront routes.

Each page class encapsulates:
    - Named selector fallback chains
    - Route navigation and load verification
    - Page-specific actions and soft checks

Author: Automation Team
License: MIT
================================================================================
"""

from .home_page import HomePage
from .product_page import ProductPage
from .cart_page import CartPage
from .checkout_page import CheckoutPage

__all__ = [
    "HomePage",
    "ProductPage",
    "CartPage",
    "CheckoutPage",
]
