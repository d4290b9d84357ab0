"""Evaluate a command's captured result against its test group."""

from __future__ import annotations

from dataclasses import dataclass

from langtest.execution.commands import CommandResult
from langtest.spec.fuzzy import Pattern
from langtest.spec.parser import ExpectedStatus, TestGroup


@dataclass
class SubTestOutcome:
    """Pass/fail of one sub-test, with what was expected and what was seen."""

    group: str
    key: str  # status, stdout or stderr
    passed: bool
    expected: str
    actual: str


def describe_exit(result: CommandResult) -> str:
    """Human-readable actual status of a command."""
    if result.error is not None:
        return f"error: {result.error}"
    assert result.exit_code is not None
    if result.exit_code < 0:
        return f"{result.exit_code} (killed by signal {-result.exit_code})"
    return str(result.exit_code)


def check_status(
    group: str, expected: ExpectedStatus, result: CommandResult
) -> SubTestOutcome:
    return SubTestOutcome(
        group=group,
        key="status",
        passed=result.error is None and expected.accepts(result.exit_code),
        expected=str(expected),
        actual=describe_exit(result),
    )


def check_stream(
    group: str, key: str, expected: Pattern, actual: str
) -> SubTestOutcome:
    return SubTestOutcome(
        group=group,
        key=key,
        passed=expected.matches(actual),
        expected=str(expected),
        actual=actual.strip(),
    )


def evaluate_group(group: TestGroup, result: CommandResult) -> list[SubTestOutcome]:
    """Check every sub-test present in ``group`` against ``result``.

    A command that could not be run fails a single ``status`` outcome (the
    declared status, or ``success`` when none is declared) and its streams
    are not compared.
    """
    if result.error is not None:
        expected = group.status or ExpectedStatus(kind="success")
        return [check_status(group.name, expected, result)]

    outcomes: list[SubTestOutcome] = []
    for subtest in group.subtests:
        if isinstance(subtest.expected, ExpectedStatus):
            outcomes.append(check_status(group.name, subtest.expected, result))
        elif subtest.key == "stdout":
            outcomes.append(
                check_stream(group.name, "stdout", subtest.expected, result.stdout)
            )
        else:
            outcomes.append(
                check_stream(group.name, "stderr", subtest.expected, result.stderr)
            )
    return outcomes
