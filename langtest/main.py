"""Entry point for the language tester.

Discovers test files, filters them by name, runs the configured commands
against each one and checks the results against the expectations embedded
in the files' comments.
"""

from __future__ import annotations

import argparse
import sys
import tempfile
from pathlib import Path

from langtest.config import ConfigError, LangTestConfig
from langtest.discovery.test_files import (
    apply_filters,
    comment_extractor,
    discover_test_files,
)
from langtest.execution.executor import AsyncExecutor, SequentialExecutor
from langtest.execution.runner import ERROR, FAILED, FileResult
from langtest.reporting.console import format_results
from langtest.reporting.reporter import Reporter


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Language tester - checks commands against expectations "
                    "embedded in test file comments"
    )
    parser.add_argument(
        "filters",
        nargs="*",
        help="Only run tests whose name contains one of these substrings",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("langtest.json"),
        help="Path to the JSON config file (default: langtest.json)",
    )
    parser.add_argument(
        "--test-dir",
        type=Path,
        default=None,
        help="Directory holding the test files (overrides the config file)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to write the JSON report file",
    )
    parser.add_argument(
        "--yaml-output",
        type=Path,
        default=None,
        help="Path to write the YAML report file",
    )
    parser.add_argument(
        "--max-parallel",
        type=int,
        default=None,
        help="Max test files run at once (1 runs sequentially)",
    )
    return parser.parse_intermixed_args(argv)


def _execute(
    config: LangTestConfig,
    args: argparse.Namespace,
) -> tuple[list[FileResult], int] | None:
    """Discover, filter and run the test files.

    Returns:
        Tuple of (results, filtered out count), or None on setup errors
        (already reported on stderr).
    """
    test_dir = args.test_dir or config.test_dir
    try:
        files = discover_test_files(test_dir, config.extensions)
        commands = config.commands
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    if not commands:
        print("Error: no commands configured", file=sys.stderr)
        return None

    selected, filtered_out = apply_filters(files, args.filters)
    extractor = comment_extractor(config.comment_prefix)
    max_parallel = args.max_parallel or config.max_parallel

    with tempfile.TemporaryDirectory(prefix="langtest_") as tmpdir:
        supplier = config.command_supplier(Path(tmpdir))
        executor: SequentialExecutor | AsyncExecutor
        if max_parallel == 1:
            executor = SequentialExecutor(
                selected,
                extractor,
                supplier,
                max_failures=config.max_failures,
                timeout=config.timeout,
            )
        else:
            executor = AsyncExecutor(
                selected,
                extractor,
                supplier,
                max_failures=config.max_failures,
                max_parallel=max_parallel,
                timeout=config.timeout,
            )
        results = executor.execute()

    return results, filtered_out


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.config.exists():
        config = LangTestConfig(args.config)
    else:
        print(f"Warning: config file not found: {args.config}, using defaults",
              file=sys.stderr)
        config = LangTestConfig(None)

    executed = _execute(config, args)
    if executed is None:
        return 1
    results, filtered_out = executed

    print(format_results(results, filtered_out), end="")

    if args.output or args.yaml_output:
        reporter = Reporter()
        reporter.add_results(results)
        reporter.set_filtered_out(filtered_out)
        if args.output:
            reporter.write_report(args.output)
            print(f"Report written to {args.output}")
        if args.yaml_output:
            reporter.write_yaml(args.yaml_output)
            print(f"Report written to {args.yaml_output}")

    has_failure = any(r.status in (FAILED, ERROR) for r in results)
    return 1 if has_failure else 0


if __name__ == "__main__":
    sys.exit(main())
