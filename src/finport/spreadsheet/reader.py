"""Spreadsheet reading for statement and salary uploads."""

import csv
import io
import zipfile
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Optional, Protocol, Union

import openpyxl
import xlrd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError
from xlrd.xldate import xldate_as_datetime
from loguru import logger

from finport.domain.entities import RawRow, SheetData
from finport.domain.errors import (
    ValidationError,
    file_empty_or_invalid,
    unsupported_file_type,
)

Source = Union[str, Path, BinaryIO]

XLSX_EXTENSIONS = {".xlsx", ".xlsm"}
XLS_EXTENSIONS = {".xls"}
CSV_EXTENSIONS = {".csv"}

# Tried in order; latin-1 decodes any byte sequence.
CSV_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


class SpreadsheetReader(Protocol):
    """Anything that can turn an uploaded file into header + data rows."""

    def read(self, source: Source, filename: Optional[str] = None) -> SheetData:
        ...


def is_blank(value: Any) -> bool:
    """Check whether a cell holds nothing but whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_row_empty(cells: Iterable[Any]) -> bool:
    """Check whether every cell of a row is blank."""
    return all(is_blank(cell) for cell in cells)


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text.

    Whole-number floats lose their ".0" so numeric IDs read back the way
    they were typed into the spreadsheet.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def xls_cell_value(cell: xlrd.sheet.Cell, datemode: int) -> Any:
    """Return the value of an xlrd cell, turning date cells into datetimes.

    xls files store dates as serials in either the 1900 or the 1904 date
    system; ``datemode`` is the workbook's system.
    """
    if cell.ctype == xlrd.XL_CELL_DATE:
        try:
            return xldate_as_datetime(cell.value, datemode)
        except (ValueError, OverflowError):
            return None
    return cell.value


def decode_csv(data: bytes) -> str:
    """Decode csv bytes, falling back from UTF-8 to Windows code pages."""
    for encoding in CSV_ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        if encoding != CSV_ENCODINGS[0]:
            logger.debug("csv is not UTF-8, decoded as {}", encoding)
        return text
    raise ValidationError(file_empty_or_invalid())


def _split_rows(rows: Iterable[Iterable[Any]]) -> SheetData:
    all_rows = [tuple(row) for row in rows]
    if not all_rows:
        raise ValidationError(file_empty_or_invalid())

    header = [None if cell is None else str(cell) for cell in all_rows[0]]
    data = [
        RawRow(row_number=row_number, cells=cells)
        for row_number, cells in enumerate(all_rows[1:], start=2)
    ]
    return SheetData(header=header, rows=data)


class WorkbookReader:
    """Read the first sheet of an xlsx, xls or csv file.

    The file type is chosen from the file name extension.
    """

    def read(self, source: Source, filename: Optional[str] = None) -> SheetData:
        """Read header and data rows.

        Args:
            source: Path to the file, or a binary file object
            filename: Original file name; required when ``source`` is a file object

        Returns:
            SheetData with the header row separate from the data rows

        Raises:
            ValidationError: If the type is unsupported or the file has no rows
        """
        if filename is None:
            if isinstance(source, (str, Path)):
                filename = Path(source).name
            else:
                filename = getattr(source, "name", "") or ""

        extension = Path(filename).suffix.lower()
        try:
            if extension in XLSX_EXTENSIONS:
                sheet = self._read_xlsx(source)
            elif extension in XLS_EXTENSIONS:
                sheet = self._read_xls(source)
            elif extension in CSV_EXTENSIONS:
                sheet = self._read_csv(source)
            else:
                raise ValidationError(unsupported_file_type(filename))
        except (zipfile.BadZipFile, InvalidFileException, xlrd.XLRDError, CompDocError) as e:
            logger.warning("Unreadable workbook '{}': {}", filename, e)
            raise ValidationError(file_empty_or_invalid()) from e

        logger.debug("Read {} data rows from '{}'", len(sheet.rows), filename)
        return sheet

    def _read_xlsx(self, source: Source) -> SheetData:
        workbook = openpyxl.load_workbook(source, read_only=True, data_only=True)
        try:
            if not workbook.worksheets:
                raise ValidationError(file_empty_or_invalid())
            worksheet = workbook.worksheets[0]
            return _split_rows(worksheet.iter_rows(min_row=1, values_only=True))
        finally:
            workbook.close()

    def _read_xls(self, source: Source) -> SheetData:
        if isinstance(source, (str, Path)):
            workbook = xlrd.open_workbook(str(source))
        else:
            workbook = xlrd.open_workbook(file_contents=source.read())
        if workbook.nsheets == 0:
            raise ValidationError(file_empty_or_invalid())
        sheet = workbook.sheet_by_index(0)
        return _split_rows(
            [xls_cell_value(cell, workbook.datemode) for cell in sheet.row(index)]
            for index in range(sheet.nrows)
        )

    def _read_csv(self, source: Source) -> SheetData:
        if isinstance(source, (str, Path)):
            with open(source, "rb") as f:
                data = f.read()
        else:
            data = source.read()
        return self._read_csv_text(io.StringIO(decode_csv(data), newline=""))

    def _read_csv_text(self, f) -> SheetData:
        sample = f.read(4096)
        f.seek(0)
        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=",;\t|")
        except csv.Error:
            dialect = csv.excel
        reader = csv.reader(f, dialect)
        return _split_rows(row for row in reader)
