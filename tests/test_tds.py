"""Tests for the quarterly TDS summary and its workbook export."""

import pytest
from openpyxl import load_workbook

from finport.domain.entities import DraftSalaryEntry
from finport.domain.errors import ValidationError
from finport.domain.tds import TdsReportService
from finport.spreadsheet.writer import write_tds_workbook


def _entry(entry_id, date, employee_id, name, tds):
    return DraftSalaryEntry(
        id=entry_id,
        row_index=entry_id + 1,
        date=date,
        account=name or "",
        employee_id=employee_id,
        employee_name=name,
        gross_salary=tds * 10,
        tds=tds,
        net_salary=tds * 9,
    )


ENTRIES = [
    _entry(1, "2024-05-01", 2, "Jane Smith", 4000.0),
    _entry(2, "2024-04-01", 1, "John Doe", 5000.0),
    _entry(3, "2024-04-15", 1, "John Doe", 500.0),
    _entry(4, "2024-06-01", 1, "John Doe", 5000.0),
    _entry(5, "2024-07-01", 1, "John Doe", 5000.0),
    _entry(6, "2024-05-01", None, None, 3000.0),
    _entry(7, None, 2, "Jane Smith", 4000.0),
]


def test_summarize_groups_by_employee_and_month():
    """TDS is summed per employee per month within the quarter."""
    report = TdsReportService().summarize(ENTRIES, 2024, 1)

    assert report.label == "Q1"
    assert [name for _, name in report.months] == ["April", "May", "June"]
    assert [row.name for row in report.rows] == ["John Doe", "Jane Smith"]
    john, jane = report.rows
    assert john.monthly_tds == (5500.0, 0.0, 5000.0)
    assert john.total == 10500.0
    assert jane.monthly_tds == (0.0, 4000.0, 0.0)
    assert report.monthly_totals == (5500.0, 4000.0, 5000.0)


def test_summarize_fourth_quarter_uses_next_year():
    """Q4 covers January to March after the fiscal year start."""
    entries = [
        _entry(1, "2025-02-01", 1, "John Doe", 100.0),
        _entry(2, "2024-02-01", 1, "John Doe", 999.0),
    ]

    report = TdsReportService().summarize(entries, 2024, 4)

    assert report.rows[0].monthly_tds == (0.0, 100.0, 0.0)
    assert report.file_name == "TDS_FY2024-25_Q4.xlsx"


def test_summarize_looks_up_pan(temp_db, employee_service):
    """PANs come from the employee directory."""
    employee_id = employee_service.create_employee(name="John Doe", pan="ABCDE1234F")
    entries = [_entry(1, "2024-04-01", employee_id, "John Doe", 5000.0)]

    report = TdsReportService(temp_db).summarize(entries, 2024, 1)

    assert report.rows[0].pan == "ABCDE1234F"


@pytest.mark.parametrize("fy_start, quarter", [(1999, 1), (2024, 0), (2024, 5)])
def test_summarize_rejects_bad_period(fy_start, quarter):
    """Fiscal years and quarters outside range are rejected."""
    with pytest.raises(ValidationError):
        TdsReportService().summarize(ENTRIES, fy_start, quarter)


def test_write_tds_workbook(tmp_path):
    """The export has a header, one row per employee and a total row."""
    report = TdsReportService().summarize(ENTRIES, 2024, 1)

    path = write_tds_workbook(report, tmp_path / report.file_name)

    sheet = load_workbook(path).active
    rows = [list(row) for row in sheet.iter_rows(values_only=True)]
    assert sheet.title == "Q1"
    assert rows[0] == ["Name", "PAN", "April-Tax", "May-Tax", "June-Tax"]
    assert rows[1][0] == "John Doe"
    assert rows[1][1] in (None, "")
    assert rows[1][2:] == [5500, 0, 5000]
    assert rows[-1][0] == "Total"
    assert rows[-1][2:] == [5500, 4000, 5000]
    assert len(rows) == 4
