"""Smoke run summary and Allure report helpers."""

from .summary import SUMMARY_FILENAME, ScenarioRecord, SmokeSummary, generate_allure_report

__all__ = [
    "ScenarioRecord",
    "SmokeSummary",
    "SUMMARY_FILENAME",
    "generate_allure_report",
]
