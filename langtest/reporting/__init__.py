"""Test result reporting: console output and JSON/YAML report files."""

from langtest.reporting.console import format_results
from langtest.reporting.reporter import Reporter

__all__ = [
    "Reporter",
    "format_results",
]
