"""Test file executors.

Provides SequentialExecutor for running test files one after another and
AsyncExecutor for sliding window parallel execution.  Test files are
independent of each other, so the parallel executor gives no ordering
guarantee between them; within one file commands always run in order.
Both support a max_failures threshold after which no further files are
started.
"""

from __future__ import annotations

import asyncio
import os

from langtest.discovery.test_files import Extractor, TestFile
from langtest.execution.commands import CommandSupplier
from langtest.execution.runner import ERROR, FAILED, FileResult, run_test_file


def _is_failure(result: FileResult) -> bool:
    return result.status in (FAILED, ERROR)


class SequentialExecutor:
    """Runs test files one at a time, in the order given."""

    def __init__(
        self,
        files: list[TestFile],
        extractor: Extractor,
        command_supplier: CommandSupplier,
        max_failures: int | None = None,
        timeout: float | None = None,
    ) -> None:
        self.files = files
        self.extractor = extractor
        self.command_supplier = command_supplier
        self.max_failures = max_failures
        self.timeout = timeout

    def execute(self) -> list[FileResult]:
        """Run every test file.

        Returns:
            List of FileResult objects in execution order.
        """
        results: list[FileResult] = []
        failure_count = 0
        for test_file in self.files:
            if self.max_failures is not None and failure_count >= self.max_failures:
                break
            result = run_test_file(
                test_file, self.extractor, self.command_supplier, self.timeout,
            )
            results.append(result)
            if _is_failure(result):
                failure_count += 1
        return results


class AsyncExecutor:
    """Runs test files in parallel using asyncio with a sliding window.

    Uses a semaphore to limit concurrency to max_parallel files.  Each file
    runs in the default thread pool so blocking subprocess calls do not
    stall the event loop.
    """

    def __init__(
        self,
        files: list[TestFile],
        extractor: Extractor,
        command_supplier: CommandSupplier,
        max_failures: int | None = None,
        max_parallel: int | None = None,
        timeout: float | None = None,
    ) -> None:
        self.files = files
        self.extractor = extractor
        self.command_supplier = command_supplier
        self.max_failures = max_failures
        self.max_parallel = max_parallel or os.cpu_count() or 4
        self.timeout = timeout

    def execute(self) -> list[FileResult]:
        """Run every test file.

        Returns:
            List of FileResult objects in completion order.
        """
        if not self.files:
            return []
        return asyncio.run(self._execute_async())

    async def _execute_async(self) -> list[FileResult]:
        semaphore = asyncio.Semaphore(self.max_parallel)
        lock = asyncio.Lock()
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        results: list[FileResult] = []
        failure_count = 0

        async def run_file(test_file: TestFile) -> None:
            nonlocal failure_count
            async with semaphore:
                if stop_event.is_set():
                    return
                result = await loop.run_in_executor(
                    None,
                    run_test_file,
                    test_file,
                    self.extractor,
                    self.command_supplier,
                    self.timeout,
                )
                async with lock:
                    results.append(result)
                    if _is_failure(result):
                        failure_count += 1
                        if (
                            self.max_failures is not None
                            and failure_count >= self.max_failures
                        ):
                            stop_event.set()

        await asyncio.gather(*(run_file(f) for f in self.files))
        return results
