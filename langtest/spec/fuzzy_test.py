"""Unit tests for the fuzzy matcher."""

from __future__ import annotations

import pytest

from langtest.spec.errors import PatternError, SpecificationError
from langtest.spec.fuzzy import WILDCARD, Pattern, match_line, matches


def _match(p: str, s: str) -> bool:
    return matches(p.splitlines(), s)


class TestMatchLine:
    """Tests for single-line matching."""

    def test_exact(self):
        """Identical lines match."""
        assert match_line("abc", "abc")

    def test_case_sensitive(self):
        """Matching is case sensitive."""
        assert not match_line("abc", "ABC")

    def test_leading_wildcard_matches_suffix(self):
        """'...x' matches lines ending with x."""
        assert match_line("...rs:12:9", "  --> unused_var.rs:12:9")
        assert not match_line("...rs:12:9", "unused_var.rs:12:10")

    def test_trailing_wildcard_matches_prefix(self):
        """'x...' matches lines starting with x."""
        assert match_line("warning:...", "warning: unused variable")
        assert not match_line("warning:...", "error: unused variable")

    def test_both_wildcards_match_substring(self):
        """'...x...' matches lines containing x."""
        assert match_line("...unused...", "warning: unused variable")
        assert not match_line("...unused...", "warning: variable")

    def test_wildcard_alone_matches_any_line(self):
        """A bare wildcard matches any single line."""
        assert match_line(WILDCARD, "anything")
        assert match_line(WILDCARD, "")

    def test_plain_line_is_not_substring(self):
        """Without wildcards a partial line does not match."""
        assert not match_line("abc", "abcd")


class TestMatches:
    """Tests for the line-sequence matching algorithm."""

    def test_empty_pattern_and_text(self):
        """Empty pattern against empty text matches."""
        assert _match("", "")
        assert _match("", "\n")
        assert _match("\n", "\n")

    def test_single_line(self):
        """Single identical line matches."""
        assert _match("a", "a")

    def test_leading_wildcard(self):
        """Wildcard before the only line."""
        assert _match("...\na", "a")

    def test_surrounding_wildcards(self):
        """Wildcards on both sides of a line."""
        assert _match("...\na\n...", "a")

    def test_trailing_wildcard(self):
        """Trailing wildcard matches zero remaining lines."""
        assert _match("a\n...", "a")

    def test_wildcard_matches_zero_lines(self):
        """Wildcard between two lines can match nothing."""
        assert matches(["a", "...", "d"], "a\nd")

    def test_wildcard_matches_many_lines(self):
        """Wildcard between two lines can skip several."""
        assert matches(["a", "...", "d"], "a\nb\nc\nd")

    def test_wildcard_target_never_found(self):
        """Line after a wildcard must appear somewhere."""
        assert not matches(["a", "...", "d"], "a\nb\nc")

    def test_multiple_wildcards(self):
        """Several wildcards in one pattern."""
        assert _match("a\n...\nc\n...\ne", "a\nb\nc\nd\ne")

    def test_wildcard_then_suffix_line(self):
        """Wildcard followed by a suffix-matching line."""
        assert matches(["a", "...", "...b"], "a\nb")

    def test_lone_wildcard_matches_anything(self):
        """A pattern of only the wildcard matches any text."""
        assert matches([WILDCARD], "")
        assert matches([WILDCARD], "x\ny\nz")

    def test_exact_sequence(self):
        """Without wildcards the lines must be equal in order."""
        assert matches(["a", "b"], "a\nb")
        assert not matches(["a", "b"], "b\na")
        assert not matches(["a", "b"], "a\nc")

    def test_whitespace_ignored(self):
        """Outer whitespace and per-line indentation are ignored."""
        assert matches(["a", "b"], "\n\n   a  \n\tb\n\n")

    def test_mismatch_without_wildcard_fails_immediately(self):
        """A non-wildcard mismatch is not retried further down."""
        assert not matches(["b"], "a\nb")

    def test_first_match_wins(self):
        """The wildcard scan stops at the first satisfying line."""
        # 'x' is found at line 2, after which 'y' must follow directly.
        assert not matches(["...", "x", "y"], "x\nz\nx\ny")

    def test_pattern_exhausted_passes(self):
        """Leftover actual lines after the pattern ends do not fail."""
        assert matches(["a"], "a\nb")

    def test_text_exhausted_passes(self):
        """Leftover pattern lines after the text ends do not fail."""
        assert matches(["a", "b"], "a")

    def test_consecutive_wildcards_rejected(self):
        """Two wildcard lines in a row are an error, not a match."""
        with pytest.raises(PatternError, match="consecutive"):
            matches(["a", "...", "...", "b"], "a\nb")

    def test_consecutive_wildcards_rejected_even_when_unreached(self):
        """The check happens before any matching."""
        with pytest.raises(PatternError):
            matches(["x", "...", "..."], "nope")


class TestPattern:
    """Tests for the Pattern value type."""

    def test_construction_rejects_consecutive_wildcards(self):
        """Pattern construction fails fast on adjacent wildcards."""
        with pytest.raises(PatternError):
            Pattern(("a", "...", "..."))

    def test_pattern_error_is_specification_error(self):
        """PatternError is a kind of SpecificationError."""
        assert issubclass(PatternError, SpecificationError)

    def test_from_block_strips_outer_blank_lines(self):
        """Leading/trailing blank lines go, interior ones stay."""
        p = Pattern.from_block("\n\n  a\n\n  b  \n\n")
        assert p.lines == ("a", "", "b")

    def test_from_block_accepts_line_list(self):
        """from_block also takes a list of raw lines."""
        p = Pattern.from_block(["", "    x", "    ...y", ""])
        assert p.lines == ("x", "...y")

    def test_empty_pattern_requires_empty_text(self):
        """An explicitly empty pattern fails on any output."""
        p = Pattern()
        assert p.is_empty
        assert p.matches("")
        assert p.matches("  \n\n")
        assert not p.matches("hello")

    def test_non_empty_pattern_delegates(self):
        """Non-empty patterns use the fuzzy algorithm."""
        p = Pattern(("Hello...",))
        assert p.matches("Hello world\n")
        assert not p.matches("Goodbye")

    def test_str_joins_lines(self):
        """str() gives the pattern text."""
        assert str(Pattern(("a", "...", "b"))) == "a\n...\nb"

    def test_list_input_normalised_to_tuple(self):
        """Patterns built from lists compare equal to tuple-built ones."""
        assert Pattern(["a", "b"]) == Pattern(("a", "b"))
