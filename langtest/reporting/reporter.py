"""Report generation for test file verdicts.

Generates JSON and YAML reports from file results, one entry per test file
with its commands and their sub-test outcomes.  Failed sub-tests carry the
expected pattern and the actual captured text so a diff can be rendered
from the report alone.
"""

from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Any

import yaml

from langtest.execution.checks import SubTestOutcome
from langtest.execution.runner import CommandRun, FileResult

# Valid file status values
VALID_STATUSES = frozenset({
    "passed",
    "failed",
    "error",
    "ignored",
})


class Reporter:
    """Collects file results and generates JSON/YAML reports."""

    def __init__(self) -> None:
        self.results: list[FileResult] = []
        self.filtered_out = 0

    def add_result(self, result: FileResult) -> None:
        """Add a file result to the report.

        Raises:
            ValueError: If the result has an unknown status.
        """
        if result.status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status '{result.status}' for {result.name}, "
                f"must be one of {sorted(VALID_STATUSES)}"
            )
        self.results.append(result)

    def add_results(self, results: list[FileResult]) -> None:
        """Add multiple file results to the report."""
        for result in results:
            self.add_result(result)

    def set_filtered_out(self, count: int) -> None:
        """Record how many test files the name filters excluded."""
        self.filtered_out = count

    def generate_report(self) -> dict[str, Any]:
        """Generate the report data structure.

        Returns:
            Dictionary representing the full report, suitable for
            JSON or YAML serialization.
        """
        now = datetime.datetime.now(tz=datetime.timezone.utc).isoformat()
        report: dict[str, Any] = {
            "generated_at": now,
            "summary": self._compute_summary(),
            "tests": [self._format_result(r) for r in self.results],
        }
        return {"report": report}

    def write_report(self, path: Path) -> None:
        """Write the report as a JSON file."""
        report = self.generate_report()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(report, f, indent=2)

    def write_yaml(self, path: Path) -> None:
        """Write the report as a YAML file."""
        report = self.generate_report()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(report, f, sort_keys=False, allow_unicode=True)

    def _compute_summary(self) -> dict[str, Any]:
        """Compute summary statistics from results."""
        counts = {
            status: sum(1 for r in self.results if r.status == status)
            for status in ("passed", "failed", "error", "ignored")
        }
        outcomes = [o for r in self.results for o in r.outcomes]
        return {
            "total": len(self.results),
            **counts,
            "filtered_out": self.filtered_out,
            "subtests_passed": sum(1 for o in outcomes if o.passed),
            "subtests_failed": sum(1 for o in outcomes if not o.passed),
            "total_duration_seconds": round(
                sum(r.duration for r in self.results), 3
            ),
        }

    def _format_result(self, result: FileResult) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "name": result.name,
            "path": result.path,
            "status": result.status,
            "duration_seconds": round(result.duration, 3),
        }
        if result.error:
            entry["error"] = result.error
        if result.commands:
            entry["commands"] = [self._format_command(c) for c in result.commands]
        return entry

    def _format_command(self, run: CommandRun) -> dict[str, Any]:
        entry: dict[str, Any] = {"label": run.label, "status": run.status}
        cmd = run.result
        if cmd is not None:
            entry["argv"] = list(cmd.argv)
            if cmd.exit_code is not None:
                entry["exit_code"] = cmd.exit_code
            if cmd.error:
                entry["error"] = cmd.error
            entry["duration_seconds"] = round(cmd.duration, 3)
        if run.outcomes:
            entry["subtests"] = [_format_outcome(o) for o in run.outcomes]
        return entry


def _format_outcome(outcome: SubTestOutcome) -> dict[str, Any]:
    entry: dict[str, Any] = {"key": outcome.key, "passed": outcome.passed}
    # Logs only where they explain a failure
    if not outcome.passed:
        entry["expected"] = outcome.expected
        entry["actual"] = outcome.actual
    return entry
