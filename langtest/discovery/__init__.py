"""Test file discovery, name filtering and specification extraction."""

from langtest.discovery.test_files import (
    TestFile,
    apply_filters,
    comment_extractor,
    discover_test_files,
)

__all__ = [
    "TestFile",
    "apply_filters",
    "comment_extractor",
    "discover_test_files",
]
