"""
================================================================================
Smoke Run Reporting
================================================================================

Per-scenario outcome summary and Allure report generation.

Features:
- Scenario records (outcome, duration) collected from pytest reports
- `smoke-summary.json` written at the end of a run
- Allure HTML report generation through the allure command line

================================================================================
"""

import json
import subprocess
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger


SUMMARY_FILENAME = "smoke-summary.json"


# ================================================================================
# Scenario Summary
# ================================================================================

@dataclass
class ScenarioRecord:
    """Outcome of one scenario."""
    nodeid: str
    outcome: str
    duration_s: float = 0.0
    message: str = ""


@dataclass
class SmokeSummary:
    """Summary of a smoke run."""
    scenarios: List[ScenarioRecord] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def record(
        self,
        nodeid: str,
        outcome: str,
        duration_s: float = 0.0,
        message: str = "",
    ) -> ScenarioRecord:
        """
        Record a scenario outcome; a later phase of the same scenario
        (e.g. a teardown error) replaces a passing record, and the attempt
        after a rerun replaces the rerun.
        """
        for existing in self.scenarios:
            if existing.nodeid == nodeid:
                existing.duration_s = round(existing.duration_s + duration_s, 3)
                if existing.outcome == "rerun":
                    existing.outcome = outcome
                    existing.message = message
                elif outcome != "passed":
                    existing.outcome = outcome
                    existing.message = message or existing.message
                return existing

        scenario = ScenarioRecord(nodeid, outcome, round(duration_s, 3), message)
        self.scenarios.append(scenario)
        return scenario

    def count(self, outcome: str) -> int:
        return sum(1 for s in self.scenarios if s.outcome == outcome)

    @property
    def total(self) -> int:
        return len(self.scenarios)

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.count("passed") / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "total": self.total,
            "passed": self.count("passed"),
            "failed": self.count("failed"),
            "skipped": self.count("skipped"),
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_s": round(sum(s.duration_s for s in self.scenarios), 3),
            "scenarios": [asdict(s) for s in self.scenarios],
        }

    def write(self, results_dir: Union[str, Path]) -> Path:
        """Write `smoke-summary.json` into `results_dir`."""
        results_dir = Path(results_dir)
        results_dir.mkdir(parents=True, exist_ok=True)
        path = results_dir / SUMMARY_FILENAME
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"Smoke summary written: {path}")
        return path

    def log(self) -> None:
        """Log the summary table."""
        logger.info("=" * 60)
        logger.info("SMOKE RUN SUMMARY")
        logger.info("=" * 60)
        for scenario in self.scenarios:
            logger.info(f"{scenario.outcome:<8} {scenario.duration_s:>7.2f}s  {scenario.nodeid}")
        logger.info(
            f"Total: {self.total} | Passed: {self.count('passed')} | "
            f"Failed: {self.count('failed')} | Skipped: {self.count('skipped')} | "
            f"Pass Rate: {self.pass_rate:.2f}%"
        )


# ================================================================================
# Allure Report
# ================================================================================

def generate_allure_report(
    results_dir: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
) -> bool:
    """
    Generate Allure HTML report from results.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Report directory (default: sibling `allure-report`)

    Returns:
        True if successful
    """
    results_dir = Path(results_dir)
    report_dir = Path(output_dir) if output_dir else results_dir.parent / "allure-report"

    cmd = ["allure", "generate", str(results_dir), "-o", str(report_dir), "--clean"]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("Allure command not found. Install allure-commandline to render the report.")
        return False

    if result.returncode != 0:
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    logger.info(f"Report generated at {report_dir}")
    return True


__all__ = [
    "ScenarioRecord",
    "SmokeSummary",
    "SUMMARY_FILENAME",
    "generate_allure_report",
]
