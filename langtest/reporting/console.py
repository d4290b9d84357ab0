"""Human-readable test run output, in the style of a unit test runner::

    running 4 tests
    test lang_tests::no_main ... ok
    test lang_tests::unused_var ... FAILED

    failures:

    ---- lang_tests::unused_var Compiler stderr ----
    Expected:
      ...
    Actual:
      ...

    failures:
        lang_tests::unused_var

    test result: FAILED. 3 passed; 1 failed; 0 ignored; 0 measured; 0 filtered out
"""

from __future__ import annotations

from langtest.execution.runner import ERROR, FAILED, IGNORED, PASSED, FileResult

_STATUS_WORDS = {
    PASSED: "ok",
    FAILED: "FAILED",
    ERROR: "ERROR",
    IGNORED: "ignored",
}


def _indent_block(text: str, prefix: str = "  ") -> list[str]:
    if not text:
        return [f"{prefix}<empty>"]
    return [f"{prefix}{line}" if line else "" for line in text.splitlines()]


def format_test_line(result: FileResult) -> str:
    return f"test {result.name} ... {_STATUS_WORDS.get(result.status, result.status)}"


def format_failure(result: FileResult) -> list[str]:
    """Detail blocks for every failed sub-test or specification error of a file."""
    lines: list[str] = []
    if result.error:
        lines.append(f"---- {result.name} ----")
        lines.append(result.error)
        lines.append("")
    for outcome in result.failures:
        lines.append(f"---- {result.name} {outcome.group} {outcome.key} ----")
        if outcome.key == "status":
            lines.append(f"Expected: {outcome.expected}")
            lines.append(f"Actual: {outcome.actual}")
        else:
            lines.append("Expected:")
            lines.extend(_indent_block(outcome.expected))
            lines.append("Actual:")
            lines.extend(_indent_block(outcome.actual))
        lines.append("")
    return lines


def format_results(
    results: list[FileResult], filtered_out: int = 0
) -> str:
    """Render a whole run: per-file lines, failure details and the summary."""
    lines = [
        "",
        f"running {len(results)} test{'s' if len(results) != 1 else ''}",
    ]
    lines.extend(format_test_line(r) for r in results)
    lines.append("")

    failed = [r for r in results if r.status in (FAILED, ERROR)]
    if failed:
        lines.append("failures:")
        lines.append("")
        for result in failed:
            lines.extend(format_failure(result))
        lines.append("failures:")
        lines.extend(f"    {r.name}" for r in failed)
        lines.append("")

    passed = sum(1 for r in results if r.status == PASSED)
    ignored = sum(1 for r in results if r.status == IGNORED)
    verdict = "FAILED" if failed else "ok"
    lines.append(
        f"test result: {verdict}. {passed} passed; {len(failed)} failed; "
        f"{ignored} ignored; 0 measured; {filtered_out} filtered out"
    )
    return "\n".join(lines) + "\n"
