"""Test run configuration file management.

Reads the JSON configuration file naming the test directory,
which files are tests, how specifications are extracted, and which commands
run against each test file.

Commands are argv templates; ``{path}``, ``{stem}``, ``{name}`` and
``{tmpdir}`` are replaced per test file, e.g.::

    {
      "test_dir": "lang_tests",
      "extensions": [".rs"],
      "comment_prefix": "//",
      "commands": [
        {"label": "Compiler", "argv": ["rustc", "-o", "{tmpdir}/{stem}", "{path}"]},
        {"label": "Run-time", "argv": ["{tmpdir}/{stem}"]}
      ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from langtest.execution.commands import Command, CommandSupplier

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "test_dir": "lang_tests",
    "extensions": [],
    "comment_prefix": "//",
    "commands": [],
    "max_parallel": None,
    "max_failures": None,
    "timeout": None,
}


class ConfigError(ValueError):
    """The configuration file contents are unusable."""


@dataclass(frozen=True)
class CommandTemplate:
    """A labelled argv template run against every test file."""

    label: str
    argv: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Any) -> CommandTemplate:
        if not isinstance(data, dict):
            raise ConfigError(f"command entry must be an object, not {data!r}")
        label = data.get("label")
        argv = data.get("argv")
        if not isinstance(label, str) or not label:
            raise ConfigError(f"command entry needs a 'label': {data!r}")
        if (
            not isinstance(argv, list)
            or not argv
            or not all(isinstance(a, str) for a in argv)
        ):
            raise ConfigError(f"command '{label}' needs a non-empty 'argv' list")
        template = cls(label=label, argv=tuple(argv))
        # Surface bad placeholders now rather than mid-run.
        template.expand(Path("test.src"), Path("tmp"))
        return template

    def expand(self, path: Path, tmpdir: Path) -> Command:
        """Substitute the per-file placeholders."""
        values = {
            "path": str(path),
            "stem": path.stem,
            "name": path.name,
            "tmpdir": str(tmpdir),
        }
        try:
            return self.label, [arg.format(**values) for arg in self.argv]
        except (KeyError, IndexError, ValueError, AttributeError) as e:
            raise ConfigError(
                f"bad placeholder in command '{self.label}': {e}"
            ) from None


class LangTestConfig:
    """Manages the JSON test run configuration file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._load()

    def _load(self) -> None:
        """Load config from the file."""
        assert self.path is not None
        try:
            text = self.path.read_text()
            data = json.loads(text)
            if isinstance(data, dict):
                self._data = {**DEFAULT_CONFIG, **data}
        except (json.JSONDecodeError, OSError):
            self._data = dict(DEFAULT_CONFIG)

    @property
    def test_dir(self) -> Path:
        """Get the test directory, relative paths resolved against the config file."""
        test_dir = Path(self._data.get("test_dir") or DEFAULT_CONFIG["test_dir"])
        if not test_dir.is_absolute() and self.path is not None:
            test_dir = self.path.parent / test_dir
        return test_dir

    @property
    def extensions(self) -> list[str]:
        """Get the accepted test file suffixes (empty = all files)."""
        return list(self._data.get("extensions") or [])

    @property
    def comment_prefix(self) -> str:
        """Get the comment prefix marking specification lines."""
        return str(
            self._data.get("comment_prefix") or DEFAULT_CONFIG["comment_prefix"]
        )

    @property
    def commands(self) -> list[CommandTemplate]:
        """Get the command templates in execution order.

        Raises:
            ConfigError: If an entry is malformed.
        """
        return [
            CommandTemplate.from_dict(c) for c in self._data.get("commands") or []
        ]

    @property
    def max_parallel(self) -> int | None:
        """Get the max parallel test files (None = CPU count)."""
        val = self._data.get("max_parallel", DEFAULT_CONFIG["max_parallel"])
        return int(val) if val is not None else None

    @property
    def max_failures(self) -> int | None:
        """Get the max failures threshold (None = unlimited)."""
        val = self._data.get("max_failures", DEFAULT_CONFIG["max_failures"])
        return int(val) if val is not None else None

    @property
    def timeout(self) -> float | None:
        """Get the per-command timeout in seconds (None = wait forever)."""
        val = self._data.get("timeout", DEFAULT_CONFIG["timeout"])
        return float(val) if val is not None else None

    def command_supplier(self, tmpdir: Path) -> CommandSupplier:
        """Build the callback returning the (label, argv) pairs for a file."""
        templates = self.commands

        def supply(path: Path) -> list[Command]:
            return [t.expand(path, tmpdir) for t in templates]

        return supply
