"""Tests for amount parsing."""

import pytest
from finport.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1,234.50", 1234.50),
        ("$1,200", 1200.0),
        ("₹ 75,000.00", 75000.0),
        (" -50 ", -50.0),
        ("123.45", 123.45),
        (500, 500.0),
        (12.5, 12.5),
    ],
)
def test_parse_amount(value, expected):
    """Numbers and formatted amount text parse to floats."""
    assert parse_amount(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["", "   ", None, "abc", "N/A", True, float("nan"), "inf"])
def test_parse_amount_unusable_is_zero(value):
    """Blank or non-numeric cells parse as zero."""
    assert parse_amount(value) == 0.0
