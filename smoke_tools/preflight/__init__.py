"""
Storefront pre-flight checks.

Run before the suite so an unreachable storefront is reported as an
environment problem instead of seven failed scenarios.
"""

from .storefront_check import (
    PreflightResult,
    StorefrontUnavailableError,
    check_storefront,
    ensure_storefront,
    probe_storefront,
)

__all__ = [
    "PreflightResult",
    "StorefrontUnavailableError",
    "check_storefront",
    "ensure_storefront",
    "probe_storefront",
]
