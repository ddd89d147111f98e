"""
================================================================================
Smoke Tools
================================================================================

Infrastructure utilities around the storefront smoke suite.

Modules:
    - common: Logging setup and filesystem helpers
    - preflight: Storefront reachability check before a run
    - fault_injection: Route fault injection for suite validation
    - report_tools: Per-scenario summary and Allure report generation

Example:
    from smoke_tools.preflight import check_storefront
    from smoke_tools.fault_injection import RouteFault

    await check_storefront("http://localhost:3000")

    with RouteFault("/path/to/storefront"):
        ...  # /cart now answers 404

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "preflight",
    "fault_injection",
    "report_tools",
]
