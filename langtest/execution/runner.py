"""Run one test file: extract, parse, execute its commands and check them.

Commands run in the order supplied.  Each command is checked against the
test group named after its label; a command with no group is run but not
checked.  Once a command fails a check, exits unsuccessfully or cannot be
run, the file's remaining commands are skipped (e.g. the compiled program is
not run when compilation failed).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from langtest.discovery.test_files import Extractor, TestFile
from langtest.execution.checks import SubTestOutcome, check_status, evaluate_group
from langtest.execution.commands import CommandResult, CommandSupplier, run_command
from langtest.spec.errors import SpecificationError
from langtest.spec.parser import ExpectedStatus, TestGroup, parse

# File statuses
PASSED = "passed"
FAILED = "failed"
ERROR = "error"
IGNORED = "ignored"

# Command statuses
UNCHECKED = "unchecked"
SKIPPED = "skipped"


@dataclass
class CommandRun:
    """One command of a test file and the checks applied to it."""

    label: str
    status: str  # passed, failed, unchecked, skipped
    result: CommandResult | None = None
    outcomes: list[SubTestOutcome] = field(default_factory=list)


@dataclass
class FileResult:
    """Verdict for one test file."""

    name: str
    path: str
    status: str  # passed, failed, error, ignored
    commands: list[CommandRun] = field(default_factory=list)
    error: str | None = None
    duration: float = 0.0

    @property
    def outcomes(self) -> list[SubTestOutcome]:
        return [o for run in self.commands for o in run.outcomes]

    @property
    def failures(self) -> list[SubTestOutcome]:
        return [o for o in self.outcomes if not o.passed]


def _check_command(
    label: str, group: TestGroup | None, result: CommandResult
) -> CommandRun:
    if group is None:
        if result.error is None:
            return CommandRun(label=label, status=UNCHECKED, result=result)
        # Not being able to run the command at all is always a failure.
        outcomes = [check_status(label, ExpectedStatus(kind="success"), result)]
    else:
        outcomes = evaluate_group(group, result)
    status = PASSED if all(o.passed for o in outcomes) else FAILED
    return CommandRun(label=label, status=status, result=result, outcomes=outcomes)


def run_test_file(
    test_file: TestFile,
    extractor: Extractor,
    command_supplier: CommandSupplier,
    timeout: float | None = None,
) -> FileResult:
    """Produce the verdict for one test file.

    Specification errors and unreadable files give an ``error`` result;
    nothing is raised for problems with the file or its commands.
    """
    start_time = time.monotonic()
    result = FileResult(
        name=test_file.name, path=str(test_file.path), status=PASSED,
    )

    try:
        text = test_file.path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        result.status = ERROR
        result.error = f"Could not read test file: {e}"
        return result

    raw = extractor(text)
    if raw is None:
        result.status = IGNORED
        return result

    try:
        spec = parse(raw)
    except SpecificationError as e:
        result.status = ERROR
        result.error = f"Invalid test specification: {e}"
        result.duration = time.monotonic() - start_time
        return result

    stop = False
    for label, argv in command_supplier(test_file.path):
        if stop:
            result.commands.append(CommandRun(label=label, status=SKIPPED))
            continue

        cmd_result = run_command(label, argv, timeout=timeout)
        run = _check_command(label, spec.get(label), cmd_result)
        result.commands.append(run)

        if run.status == FAILED:
            result.status = FAILED
        if run.status == FAILED or not cmd_result.succeeded:
            stop = True

    result.duration = time.monotonic() - start_time
    return result
