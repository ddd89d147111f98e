"""
Fault injection for validating the smoke suite.

Exports:
    - RouteFault: Disable / restore a storefront route file
    - FaultState: Which route files exist
    - FaultInjectionError: Inject / restore failures
"""

from .route_fault import DEFAULT_ROUTE_FILE, FaultInjectionError, FaultState, RouteFault

__all__ = [
    "RouteFault",
    "FaultState",
    "FaultInjectionError",
    "DEFAULT_ROUTE_FILE",
]
