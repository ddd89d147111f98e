"""Storefront smoke suite: framework, page objects and scenarios."""
