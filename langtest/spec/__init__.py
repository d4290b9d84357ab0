"""Embedded test specifications: the indentation DSL and the fuzzy matcher."""

from langtest.spec.errors import PatternError, SpecificationError
from langtest.spec.fuzzy import WILDCARD, Pattern, match_line, matches
from langtest.spec.parser import (
    ExpectedStatus,
    SubTest,
    TestGroup,
    TestSpecification,
    parse,
    render,
)

__all__ = [
    "WILDCARD",
    "ExpectedStatus",
    "Pattern",
    "PatternError",
    "SpecificationError",
    "SubTest",
    "TestGroup",
    "TestSpecification",
    "match_line",
    "matches",
    "parse",
    "render",
]
