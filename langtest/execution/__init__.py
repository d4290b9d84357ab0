"""Test execution: running commands, checking results, scheduling files."""

from langtest.execution.checks import SubTestOutcome, evaluate_group
from langtest.execution.commands import CommandResult, run_command
from langtest.execution.executor import AsyncExecutor, SequentialExecutor
from langtest.execution.runner import CommandRun, FileResult, run_test_file

__all__ = [
    "AsyncExecutor",
    "CommandResult",
    "CommandRun",
    "FileResult",
    "SequentialExecutor",
    "SubTestOutcome",
    "evaluate_group",
    "run_command",
    "run_test_file",
]
