"""Workbook export of the quarterly TDS report."""

from pathlib import Path
from typing import Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from finport.domain.tds import TdsReport

HEADER_FILL = PatternFill(fill_type="solid", start_color="15803D")
TOTAL_FILL = PatternFill(fill_type="solid", start_color="ECFDF5")
STRIPE_FILL = PatternFill(fill_type="solid", start_color="F9FAFB")
THIN = Side(style="thin", color="D1D5DB")
BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)
NUMBER_FORMAT = "#,##0.00"


def write_tds_workbook(report: TdsReport, path: Union[str, Path]) -> Path:
    """Write the report as an xlsx with one row per employee and a Total row.

    Returns:
        Path of the written file
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = report.label

    sheet.append(["Name", "PAN"] + [f"{name}-Tax" for _, name in report.months])
    for row in report.rows:
        sheet.append([row.name, row.pan] + list(row.monthly_tds))
    sheet.append(["Total", ""] + list(report.monthly_totals))

    last_col = 2 + len(report.months)
    last_row = sheet.max_row

    sheet.column_dimensions["A"].width = 30
    sheet.column_dimensions["B"].width = 18
    for col in range(3, last_col + 1):
        sheet.column_dimensions[get_column_letter(col)].width = 14

    for cell in sheet[1]:
        cell.font = Font(bold=True, size=12, color="FFFFFF")
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="left" if cell.column <= 2 else "center")

    for row_cells in sheet.iter_rows(min_row=1, max_row=last_row, max_col=last_col):
        for cell in row_cells:
            cell.border = BORDER
            if cell.row > 1 and cell.column > 2:
                cell.number_format = NUMBER_FORMAT
                cell.alignment = Alignment(horizontal="right")
            if 1 < cell.row < last_row and cell.row % 2 == 0:
                cell.fill = STRIPE_FILL

    for cell in sheet[last_row]:
        cell.font = Font(bold=True, color="111827")
        cell.fill = TOTAL_FILL

    path = Path(path)
    workbook.save(path)
    return path
