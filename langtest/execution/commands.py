"""Spawn a test command and capture its exit status and output."""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

# (label, argv) pairs in execution order
Command = tuple[str, list[str]]
CommandSupplier = Callable[[Path], Sequence[Command]]


@dataclass
class CommandResult:
    """Captured outcome of one command.

    ``exit_code`` is ``None`` when the command could not be run at all, in
    which case ``error`` says why.  Negative exit codes mean the process was
    killed by a signal.
    """

    label: str
    argv: list[str] = field(default_factory=list)
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    duration: float = 0.0
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.exit_code == 0


def run_command(
    label: str,
    argv: list[str],
    timeout: float | None = None,
) -> CommandResult:
    """Run ``argv`` to completion and capture status, stdout and stderr.

    Failures to run the command are recorded on the result rather than
    raised.
    """
    if not argv:
        return CommandResult(label=label, error="Empty command line")

    start_time = time.monotonic()
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
        return CommandResult(
            label=label,
            argv=list(argv),
            exit_code=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
            duration=time.monotonic() - start_time,
        )
    except subprocess.TimeoutExpired:
        error = f"Command timed out after {timeout} seconds"
    except FileNotFoundError:
        error = f"Executable not found: {argv[0]}"
    except OSError as e:
        error = f"OS error running command: {e}"

    return CommandResult(
        label=label,
        argv=list(argv),
        duration=time.monotonic() - start_time,
        error=error,
    )
