"""Tests for salary figure parsing."""

import pytest

from job_extractor.detectors.numeric import parse_number


class TestParseNumber:
    """Test parse_number."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("120,000", 120000.0),
            ("45", 45.0),
            ("45.50", 45.5),
            ("150k", 150000.0),
            ("1.5K", 1500.0),
            (" 95 000 ", 95000.0),
            ("150.", 150.0),
        ],
    )
    def test_parses_numeric_text(self, text, expected):
        assert parse_number(text) == expected

    def test_empty_and_none_yield_none(self):
        assert parse_number("") is None
        assert parse_number(None) is None

    def test_non_numeric_text_yields_none(self):
        assert parse_number("abc") is None
        assert parse_number("k") is None

    def test_parses_leading_number_only(self):
        """Trailing garbage after the number is ignored."""
        assert parse_number("1.2.3") == 1.2
