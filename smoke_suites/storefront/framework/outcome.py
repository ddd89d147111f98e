"""
================================================================================
Verification Outcomes
================================================================================

Tri-state outcome model for smoke checks:
    - PASS: the check held
    - SOFT_FAIL: the check failed but is tolerated (logged, scenario continues)
    - HARD_FAIL: the check failed and fails the scenario

`soft_step` wraps "nice to have" steps such as add-to-cart or cart badge
checks. Setting `smoke.strict: true` turns soft steps into hard failures.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, AsyncIterator, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from .config_loader import ConfigLoader

if TYPE_CHECKING:
    from .page_base import BasePage


class Outcome(str, Enum):
    """Result of a single verification step."""
    PASS = "pass"
    SOFT_FAIL = "soft_fail"
    HARD_FAIL = "hard_fail"


@dataclass
class StepResult:
    """
    Outcome of one step.

    Attributes:
        name: Step name (also used for the failure screenshot)
        outcome: Final outcome, PASS until the step raises
        detail: Error text for failed steps
    """
    name: str
    outcome: Outcome = Outcome.PASS
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASS


@asynccontextmanager
async def soft_step(
    name: str,
    page: Optional["BasePage"] = None,
    strict: Optional[bool] = None,
) -> AsyncIterator[StepResult]:
    """
    Run a tolerated step.

    Any exception raised inside the block is logged, attached to Allure and
    recorded as SOFT_FAIL; a screenshot named `<name>-failed` is saved when a
    page is given. In strict mode the exception propagates as HARD_FAIL.

    Usage:
        async with soft_step("add-to-cart", page=product_page) as step:
            await product_page.add_to_cart_with_specs("S", 1)
        if not step.passed:
            pytest.skip(step.detail)
    """
    if strict is None:
        strict = bool(ConfigLoader().get("smoke.strict", False))

    result = StepResult(name=name)
    with allure.step(f"Soft step: {name}"):
        try:
            yield result
        except Exception as e:
            result.detail = f"{type(e).__name__}: {e}"
            if strict:
                result.outcome = Outcome.HARD_FAIL
                logger.error(f"❌ Step '{name}' failed (strict mode): {result.detail}")
                raise

            result.outcome = Outcome.SOFT_FAIL
            logger.warning(f"⚠️ Step '{name}' failed (tolerated): {result.detail}")
            allure.attach(
                result.detail,
                name=f"Soft failure: {name}",
                attachment_type=allure.attachment_type.TEXT,
            )
            if page is not None:
                try:
                    await page.screenshot(f"{name}-failed")
                except PlaywrightError as shot_error:
                    logger.warning(f"Failed to capture screenshot for '{name}': {shot_error}")


__all__ = [
    "Outcome",
    "StepResult",
    "soft_step",
]
