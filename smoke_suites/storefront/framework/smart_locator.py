"""
================================================================================
Smart Locator with Cascading Selector Fallback
================================================================================

Element location system for storefront markup that drifts between releases
and catalog items:
    - Ordered selector candidates per logical element (list order = priority)
    - First list entry that matches wins, first DOM node of that entry is used
    - Absence is reported as None, never raised, for optional elements
    - Fallback usage tracking for selector maintenance

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page


# Probe timeout for optional elements (milliseconds)
DEFAULT_EXISTS_TIMEOUT = 2000

# Delay between resolution rounds (seconds)
POLL_INTERVAL = 0.1


class ElementNotFoundError(Exception):
    """Raised when all selector candidates fail to find an element."""
    pass


@dataclass
class LocatorHealth:
    """
    Tracks which candidate resolved a logical element.

    Attributes:
        element_name: Logical element name
        primary_selector: The preferred (first) selector
        used_fallback: Whether a non-primary candidate matched
        fallback_index: Position of the matching candidate (if fallback)
        fallback_selector: The matching candidate (if fallback)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_index: Optional[int] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Resolves one logical element through an ordered list of selectors.

    Each resolution round walks the candidates in list order and stops at the
    first entry with a matching node, so a later candidate never wins over an
    earlier one that is already present. Rounds repeat until the timeout
    elapses.

    Usage:
        >>> title = SmartLocator(page, "product_title", (
        ...     "[data-testid='product-title']",
        ...     ".product-title",
        ...     "h1",
        ... ))
        >>> handle = await title.resolve()          # Locator or None
        >>> handle = await title.locate()           # Locator or ElementNotFoundError
    """

    def __init__(
        self,
        root: Union[Page, Locator],
        element_name: str,
        candidates: Sequence[str],
    ):
        """
        Args:
            root: Page or Locator the candidates are evaluated against
            element_name: Human-readable element name for logs and reports
            candidates: Selector expressions in priority order
        """
        if not candidates:
            raise ValueError(f"No selector candidates defined for element: {element_name}")
        self.root = root
        self.element_name = element_name
        self.candidates: Tuple[str, ...] = tuple(candidates)
        self.health: Optional[LocatorHealth] = None

    def __repr__(self) -> str:
        return f"SmartLocator({self.element_name!r}, {len(self.candidates)} candidates)"

    @property
    def primary(self) -> str:
        return self.candidates[0]

    # =========================================================================
    # Derived Locators
    # =========================================================================

    def with_text(self, text: str) -> "SmartLocator":
        """Same chain, each candidate narrowed to nodes containing `text`."""
        return SmartLocator(
            self.root,
            f"{self.element_name}[{text}]",
            [f'{selector}:has-text("{text}")' for selector in self.candidates],
        )

    def within(self, root: Union[Page, Locator]) -> "SmartLocator":
        """Same chain evaluated inside another root (e.g. one cart line)."""
        return SmartLocator(root, self.element_name, self.candidates)

    # =========================================================================
    # Resolution
    # =========================================================================

    async def _matches(self, locator: Locator, state: str) -> bool:
        if await locator.count() == 0:
            return False
        if state == "visible":
            return await locator.first.is_visible()
        return True

    async def _resolve_candidate(
        self,
        timeout: int,
        state: str,
    ) -> Optional[Tuple[int, str, Locator]]:
        deadline = time.monotonic() + timeout / 1000
        while True:
            for index, selector in enumerate(self.candidates):
                locator = self.root.locator(selector)
                try:
                    if await self._matches(locator, state):
                        self._record(index, selector)
                        return index, selector, locator
                except PlaywrightError as e:
                    # Engine-specific syntax may be rejected; the next candidate still counts
                    logger.debug(f"Candidate rejected for '{self.element_name}': {selector} -> {e}")

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            await asyncio.sleep(min(POLL_INTERVAL, remaining))

    def _record(self, index: int, selector: str) -> None:
        used_fallback = index > 0
        self.health = LocatorHealth(
            element_name=self.element_name,
            primary_selector=self.primary,
            used_fallback=used_fallback,
            fallback_index=index if used_fallback else None,
            fallback_selector=selector if used_fallback else None,
        )
        if used_fallback:
            logger.warning(
                f"⚠️ Element '{self.element_name}' used fallback #{index}: {selector}"
            )
        else:
            logger.debug(f"✅ Element '{self.element_name}' found: {selector}")

    async def resolve(
        self,
        timeout: int = DEFAULT_EXISTS_TIMEOUT,
        state: str = "attached",
    ) -> Optional[Locator]:
        """
        Resolve the element, reporting absence as None.

        Args:
            timeout: Overall resolution budget in milliseconds
            state: 'attached' (node exists) or 'visible'

        Returns:
            First DOM node of the first matching candidate, or None
        """
        match = await self._resolve_candidate(timeout, state)
        if match is None:
            logger.debug(f"Element '{self.element_name}' not found within {timeout}ms")
            return None
        return match[2].first

    async def resolve_all(
        self,
        timeout: int = DEFAULT_EXISTS_TIMEOUT,
        state: str = "attached",
    ) -> Optional[Locator]:
        """Resolve to every node of the first matching candidate (for count/nth)."""
        match = await self._resolve_candidate(timeout, state)
        return match[2] if match else None

    async def locate(
        self,
        timeout: int = 5000,
        state: str = "visible",
    ) -> Locator:
        """
        Resolve the element for an intent-bearing action.

        Raises:
            ElementNotFoundError: When no candidate matched within the timeout
        """
        match = await self._resolve_candidate(timeout, state)
        if match is None:
            error_msg = (
                f"❌ All locators failed for '{self.element_name}' ({state}, {timeout}ms):\n"
                + "\n".join(f"  - {selector}" for selector in self.candidates)
            )
            logger.error(error_msg)
            raise ElementNotFoundError(error_msg)
        return match[2].first

    async def exists(self, timeout: int = DEFAULT_EXISTS_TIMEOUT) -> bool:
        return await self.resolve(timeout=timeout) is not None

    async def count(self, timeout: int = 0) -> int:
        """Number of nodes matched by the winning candidate (0 when absent)."""
        matched = await self.resolve_all(timeout=timeout)
        if matched is None:
            return 0
        return await matched.count()


def health_report(locators: Sequence[SmartLocator]) -> str:
    """
    Build a locator health report.

    Lists the elements that needed a fallback candidate, which are the
    candidates for a primary selector update.
    """
    fallbacks: List[LocatorHealth] = [
        loc.health for loc in locators if loc.health is not None and loc.health.used_fallback
    ]
    if not fallbacks:
        return "✅ All elements used primary locators. No maintenance needed."

    report_lines = [
        "⚠️ Locator Health Report - Fallbacks Used:",
        "",
        "The following elements used fallback locators.",
        "Consider updating the primary selectors:",
        "",
    ]
    for health in fallbacks:
        report_lines.extend([
            f"  [{health.element_name}]",
            f"    Failed primary: {health.primary_selector}",
            f"    Used: #{health.fallback_index} -> {health.fallback_selector}",
            "",
        ])
    return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "LocatorHealth",
    "DEFAULT_EXISTS_TIMEOUT",
    "health_report",
]
