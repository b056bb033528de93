"""Tests for date parsing of spreadsheet cells."""

import pytest
from datetime import date, datetime, timedelta
from finport.utils.date_parser import (
    parse_cell_date,
    parse_date,
    parse_serial_date,
    quarter_months,
    quarter_range,
)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("15-Jan-2024") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_relative_dates():
    """Relative dates are still understood."""
    assert parse_date("today") == date.today()
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)


def test_parse_invalid_date_raises():
    """Unparseable text raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_parse_serial_date():
    """Spreadsheet serials use the 1900 date system."""
    assert parse_serial_date(45306) == date(2024, 1, 15)
    assert parse_serial_date(45306.75) == date(2024, 1, 15)


@pytest.mark.parametrize("serial", [0, -5, float("nan"), float("inf")])
def test_parse_serial_date_rejects_non_days(serial):
    """Serials below one day or non-finite serials are not dates."""
    with pytest.raises(ValueError):
        parse_serial_date(serial)


@pytest.mark.parametrize(
    "value, expected",
    [
        (45306, "2024-01-15"),
        (45306.0, "2024-01-15"),
        ("45306", "2024-01-15"),
        ("15-Jan-2024", "2024-01-15"),
        (" 2024-03-01 ", "2024-03-01"),
        (datetime(2024, 3, 1, 14, 30), "2024-03-01"),
        (date(2024, 3, 1), "2024-03-01"),
    ],
)
def test_parse_cell_date(value, expected):
    """Date cells, serials and date text all produce ISO dates."""
    assert parse_cell_date(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("01-03-2024", "2024-03-01"),
        ("05.04.2024", "2024-04-05"),
        ("31-12-2024", "2024-12-31"),
        ("2024-03-01", "2024-03-01"),
        ("2024-03-01 10:15:00", "2024-03-01"),
        ("01/03/2024", "2024-01-03"),
    ],
)
def test_parse_cell_date_separator_order(value, expected):
    """Dash and dot dates are day-first, ISO is year-first, slash is month-first."""
    assert parse_cell_date(value) == expected


def test_parse_date_dayfirst():
    """parse_date reads ambiguous numeric dates day-first on request."""
    assert parse_date("01-03-2024", dayfirst=True) == date(2024, 3, 1)
    assert parse_date("01-03-2024") == date(2024, 1, 3)


@pytest.mark.parametrize("value", ["2024-13-45", "not a date", "", "   ", None, True, 0, "99999999999"])
def test_parse_cell_date_invalid_returns_none(value):
    """Unusable cells yield None instead of raising."""
    assert parse_cell_date(value) is None


def test_quarter_range_first_quarter():
    """Q1 of a fiscal year is April to June."""
    start, end, label = quarter_range(2024, 1)
    assert start == date(2024, 4, 1)
    assert end == date(2024, 6, 30)
    assert label == "Q1"


def test_quarter_range_fourth_quarter_crosses_year():
    """Q4 falls in the following calendar year."""
    start, end, label = quarter_range(2024, 4)
    assert start == date(2025, 1, 1)
    assert end == date(2025, 3, 31)
    assert label == "Q4"


def test_quarter_range_invalid_quarter():
    """Quarters outside 1-4 are rejected."""
    with pytest.raises(ValueError, match="Unknown quarter"):
        quarter_range(2024, 5)


def test_quarter_months():
    """Months of a quarter come with their keys and names."""
    assert quarter_months(2024, 3) == [
        ("2024-10", "October"),
        ("2024-11", "November"),
        ("2024-12", "December"),
    ]
