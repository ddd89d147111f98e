"""
Repository-level pytest configuration.

Provides:
  - Logger setup for the whole run
  - A safe default for the configuration file location
  - The per-scenario summary (`test-results/smoke-summary.json`)

Values in config/config.yaml are local placeholders; CI overrides them with
environment variables (e.g. STOREFRONT_BASE_URL).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from smoke_suites.storefront.framework.config_loader import ConfigLoader
from smoke_tools.common import init_logger
from smoke_tools.report_tools import SmokeSummary


PROJECT_ROOT = Path(__file__).parent

_summary = SmokeSummary()


def pytest_configure(config):
    os.environ.setdefault("SMOKE_CONFIG", str(PROJECT_ROOT / "config" / "config.yaml"))
    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return PROJECT_ROOT


@pytest.fixture
def fresh_config() -> Generator[None, None, None]:
    """Drop the cached configuration before and after a test that changes env/config."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def pytest_runtest_logreport(report):
    """Collect one outcome per scenario (setup / teardown errors included)."""
    if report.when == "call" or report.outcome != "passed":
        message = str(report.longrepr)[:500] if report.longrepr else ""
        outcome = "failed" if report.failed else report.outcome
        _summary.record(report.nodeid, outcome, report.duration, message)


def pytest_sessionfinish(session, exitstatus):
    # xdist workers report to the controller, which writes the file
    if hasattr(session.config, "workerinput") or _summary.total == 0:
        return
    results_dir = ConfigLoader().get("artifacts.results_dir", "test-results")
    _summary.write(PROJECT_ROOT / results_dir)
    _summary.log()
