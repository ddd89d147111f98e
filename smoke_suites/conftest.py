"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers the project-wide markers and tags tests by location.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Storefront smoke scenarios"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "fault_injection: Scenarios that disable a storefront route on purpose"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven tests"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free framework tests"
    )


def pytest_collection_modifyitems(config, items):
    """Tag tests by directory: storefront scenarios are `ui`, the rest `unit`."""
    for item in items:
        path = str(item.fspath)
        if "storefront" in path and "tests" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Storefront Smoke Test Suite",
        "=" * 60,
        "",
    ]
