"""
================================================================================
Storefront Smoke Framework
================================================================================

Playwright-based page-object framework for resilient storefront smoke tests.

Components:
    - smart_locator: Ordered selector candidates with first-match resolution
    - page_base: Base page object (navigation, safe actions, probes, screenshots)
    - browser_manager: Per-scenario browser session lifecycle
    - outcome: Pass / soft-fail / hard-fail step outcomes
    - diagnostics: Console and failed-response capture
    - wait_helpers: Bounded async polling
    - config_loader: YAML + environment configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .smart_locator import SmartLocator, ElementNotFoundError
from .page_base import BasePage
from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, ConfigurationError
from .outcome import Outcome, StepResult, soft_step

__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "BasePage",
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "Outcome",
    "StepResult",
    "soft_step",
]
