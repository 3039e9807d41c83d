"""
Unit tests for text_normalization module.
"""

import pytest
from app.core.text_normalization import Line, normalize_line, normalize_lines


class TestNormalizeLine:
    """Whitespace cleanup inside a single line."""

    def test_trims(self):
        assert normalize_line("  Senior Engineer  ") == "Senior Engineer"

    def test_collapses_tabs_and_runs(self):
        assert normalize_line("Acme\t\tCorp   Inc") == "Acme Corp Inc"

    def test_non_breaking_space(self):
        assert normalize_line("Jane\u00a0Doe") == "Jane Doe"

    def test_zero_width_characters_removed(self):
        assert normalize_line("\ufeffJane\u200b Doe") == "Jane Doe"


class TestNormalizeLines:

    def test_drops_blank_lines_and_numbers_survivors(self):
        lines = normalize_lines("Jane Doe\n\n   \nEXPERIENCE\n")
        assert lines == [Line(0, "Jane Doe"), Line(1, "EXPERIENCE")]

    def test_all_line_break_styles(self):
        lines = normalize_lines("a\r\nb\rc\nd")
        assert [l.text for l in lines] == ["a", "b", "c", "d"]
        assert [l.index for l in lines] == [0, 1, 2, 3]

    def test_empty_text(self):
        assert normalize_lines("") == []
        assert normalize_lines(" \n\t\n") == []

    @pytest.mark.parametrize("bad", [None, b"Jane Doe", 42, ["Jane Doe"]])
    def test_non_string_input_raises(self, bad):
        with pytest.raises(TypeError) as exc:
            normalize_lines(bad)
        assert type(bad).__name__ in str(exc.value)
