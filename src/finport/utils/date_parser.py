"""Date parsing utilities."""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta
from openpyxl.utils.datetime import from_excel

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

QUARTER_MONTHS = {
    1: (4, 5, 6),
    2: (7, 8, 9),
    3: (10, 11, 12),
    4: (1, 2, 3),
}

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}($|[T ])")
# Numeric dates separated by "-" or "." are day-first (31-03-2024, 31.03.2024);
# "/" separated dates stay month-first.
DAYFIRST_DATE = re.compile(r"^\d{1,2}[-.]\d{1,2}[-.]\d{2,4}$")


def parse_date(date_str: str, dayfirst: bool = False) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15-Jan-2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        dayfirst: Read ambiguous numeric dates as day-month-year

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)
        elif period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        dt = date_parser.parse(date_str, dayfirst=dayfirst)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_serial_date(serial: float) -> date:
    """Convert a spreadsheet serial number (1900 date system) to a date.

    Raises:
        ValueError: If the serial is not a usable day number
    """
    if not math.isfinite(serial) or serial < 1:
        raise ValueError(f"Invalid spreadsheet date serial: {serial}")
    try:
        return from_excel(serial).date()
    except (OverflowError, TypeError) as e:
        raise ValueError(f"Invalid spreadsheet date serial {serial}: {e}")


def parse_cell_date(value: Any) -> Optional[str]:
    """Parse a spreadsheet cell into an ISO date string.

    Date cells are used as-is and ISO text is read directly. Numbers and
    numeric strings are treated as spreadsheet serials. Everything else goes
    through ``parse_date``, day-first for "-" or "." separated numeric dates.
    Returns None instead of raising when the value is not a date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, (int, float)):
            return parse_serial_date(float(value)).isoformat()

        text = str(value).strip()
        if not text:
            return None
        if ISO_DATE.match(text):
            return date.fromisoformat(text[:10]).isoformat()
        try:
            serial = float(text)
        except ValueError:
            return parse_date(text, dayfirst=bool(DAYFIRST_DATE.match(text))).isoformat()
        return parse_serial_date(serial).isoformat()
    except ValueError:
        return None


def quarter_range(fy_start: int, quarter: int) -> tuple[date, date, str]:
    """Get start date, end date and label of a fiscal-year quarter.

    The fiscal year starting in April of ``fy_start``: Q1 is April-June,
    Q2 July-September, Q3 October-December and Q4 January-March of the
    following calendar year.

    Args:
        fy_start: Calendar year in which the fiscal year begins
        quarter: Quarter number, 1-4

    Returns:
        Tuple of (start_date, end_date, label)

    Raises:
        ValueError: If quarter is not 1-4
    """
    if quarter not in QUARTER_MONTHS:
        raise ValueError(f"Unknown quarter: {quarter}. Supported quarters: 1, 2, 3, 4")

    months = QUARTER_MONTHS[quarter]
    year = fy_start + 1 if quarter == 4 else fy_start
    start_date = date(year, months[0], 1)
    end_date = date(year, months[-1], 1) + relativedelta(months=1) - timedelta(days=1)
    return (start_date, end_date, f"Q{quarter}")


def quarter_months(fy_start: int, quarter: int) -> list[tuple[str, str]]:
    """Return (YYYY-MM key, month name) pairs for a fiscal-year quarter."""
    start_date, _, _ = quarter_range(fy_start, quarter)
    result = []
    for offset in range(3):
        month_start = start_date + relativedelta(months=offset)
        result.append((month_start.strftime("%Y-%m"), month_start.strftime("%B")))
    return result
