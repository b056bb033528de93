"""Tests for reading xlsx and csv uploads."""

import io
from datetime import datetime, timedelta

import pytest
import xlrd
from openpyxl import Workbook
from xlrd.sheet import Cell

from finport.domain.errors import ValidationError
from finport.spreadsheet import reader as reader_module
from finport.spreadsheet.reader import WorkbookReader, cell_text, is_row_empty, xls_cell_value


@pytest.fixture
def reader():
    return WorkbookReader()


@pytest.fixture
def statement_xlsx(tmp_path):
    """A small statement workbook with typed cells."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Txn Date", "Narration", "Amount", "Type"])
    sheet.append([datetime(2024, 3, 1), "Grocery store", 500, "DR"])
    sheet.append([None, None, None, None])
    sheet.append([45306, "Interest", 120.5, "CR"])
    path = tmp_path / "statement.xlsx"
    workbook.save(path)
    return path


def test_read_xlsx_separates_header(reader, statement_xlsx):
    """The header row is returned apart from the data rows."""
    sheet = reader.read(statement_xlsx)

    assert sheet.header == ["Txn Date", "Narration", "Amount", "Type"]
    assert [row.row_number for row in sheet.rows] == [2, 3, 4]
    assert sheet.rows[0].cells[1] == "Grocery store"
    assert sheet.rows[0].cells[2] == 500


def test_read_xlsx_from_file_object(reader, statement_xlsx):
    """Uploads arrive as file objects with the original file name."""
    with open(statement_xlsx, "rb") as f:
        sheet = reader.read(io.BytesIO(f.read()), filename="March.XLSX")

    assert len(sheet.rows) == 3
    assert is_row_empty(sheet.rows[1].cells)


def test_read_csv(reader, fixtures_dir):
    """CSV files are read with the sniffed delimiter."""
    sheet = reader.read(fixtures_dir / "icici_statement.csv")

    assert sheet.header == ["Txn Date", "Narration", "Amount", "Type"]
    assert sheet.rows[0].cells == ("2024-03-01", "Grocery store", "500", "DR")
    assert len(sheet.rows) == 5


def test_read_semicolon_csv_from_file_object(reader):
    """Semicolon separated uploads are detected too."""
    data = "Date;Account;Debit\n2024-04-01;John Doe;50000\n2024-04-02;Jane Smith;40000\n"
    upload = io.BytesIO(data.encode("utf-8"))

    sheet = reader.read(upload, filename="salaries.csv")

    assert sheet.header == ["Date", "Account", "Debit"]
    assert sheet.rows[1].cells == ("2024-04-02", "Jane Smith", "40000")
    assert not upload.closed


def test_read_empty_file_rejected(reader, tmp_path):
    """A file without any rows is invalid."""
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ValidationError, match="File is empty or invalid"):
        reader.read(path)


def test_read_corrupt_xlsx_rejected(reader):
    """Bytes that are not a workbook are invalid."""
    with pytest.raises(ValidationError, match="File is empty or invalid"):
        reader.read(io.BytesIO(b"definitely not a zip"), filename="statement.xlsx")


def test_read_unsupported_extension(reader, tmp_path):
    """Only xlsx, xls and csv are accepted."""
    path = tmp_path / "statement.pdf"
    path.write_bytes(b"%PDF-1.4")

    with pytest.raises(ValidationError, match="Unsupported file type"):
        reader.read(path)


def test_cell_text():
    """Cells render as trimmed text, integral floats without '.0'."""
    assert cell_text(None) == ""
    assert cell_text("  UPI-123  ") == "UPI-123"
    assert cell_text(123456.0) == "123456"
    assert cell_text(12.5) == "12.5"


def test_is_row_empty():
    """Rows of None or whitespace are empty; zero is a value."""
    assert is_row_empty((None, "", "  "))
    assert is_row_empty(())
    assert not is_row_empty((None, 0))


class FakeXlsSheet:
    def __init__(self, rows):
        self._rows = rows
        self.nrows = len(rows)

    def row(self, index):
        return self._rows[index]


class FakeXlsBook:
    def __init__(self, rows, datemode):
        self.nsheets = 1
        self.datemode = datemode
        self._sheet = FakeXlsSheet(rows)

    def sheet_by_index(self, index):
        return self._sheet


def _xls_rows():
    return [
        [Cell(xlrd.XL_CELL_TEXT, "Date"), Cell(xlrd.XL_CELL_TEXT, "Account"), Cell(xlrd.XL_CELL_TEXT, "Debit")],
        [Cell(xlrd.XL_CELL_DATE, 45306.0), Cell(xlrd.XL_CELL_TEXT, "John Doe"), Cell(xlrd.XL_CELL_NUMBER, 50000.0)],
    ]


def test_xls_cell_value_uses_date_system():
    """xls date cells honour the workbook's 1900 or 1904 date system."""
    cell = Cell(xlrd.XL_CELL_DATE, 45306.0)

    assert xls_cell_value(cell, 0) == datetime(2024, 1, 15)
    assert xls_cell_value(cell, 1) == datetime(1904, 1, 1) + timedelta(days=45306)
    assert xls_cell_value(Cell(xlrd.XL_CELL_NUMBER, 12.5), 1) == 12.5


@pytest.mark.parametrize("datemode, expected", [(0, datetime(2024, 1, 15)), (1, datetime(2028, 1, 16))])
def test_read_xls(reader, monkeypatch, datemode, expected):
    """xls uploads are read through xlrd with dates converted per workbook."""
    opened = {}

    def open_workbook(filename=None, file_contents=None):
        opened["file_contents"] = file_contents
        return FakeXlsBook(_xls_rows(), datemode)

    monkeypatch.setattr(reader_module.xlrd, "open_workbook", open_workbook)

    sheet = reader.read(io.BytesIO(b"xls bytes"), filename="salaries.xls")

    assert opened["file_contents"] == b"xls bytes"
    assert sheet.header == ["Date", "Account", "Debit"]
    assert sheet.rows[0].cells == (expected, "John Doe", 50000.0)


def test_read_corrupt_xls_rejected(reader):
    """Bytes that are not an xls workbook are invalid."""
    with pytest.raises(ValidationError, match="File is empty or invalid"):
        reader.read(io.BytesIO(b"definitely not an xls file"), filename="statement.xls")


def test_read_cp1252_csv(reader):
    """Windows exports that are not UTF-8 are still read."""
    data = "Txn Date,Narration,Amount,Type\n2024-03-01,Café £ fee,5,DR\n".encode("cp1252")

    sheet = reader.read(io.BytesIO(data), filename="statement.csv")

    assert sheet.rows[0].cells[1] == "Café £ fee"
