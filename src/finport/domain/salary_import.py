"""Salary sheet import domain service."""

from typing import Iterable, Optional

from finport.database.base import Database
from finport.domain.employee import EmployeeService
from finport.domain.entities import DraftSalaryEntry, Employee, SheetData
from finport.domain.errors import (
    EMPLOYEE_NOT_FOUND,
    INVALID_DATE,
    INVALID_GROSS_SALARY,
    MISSING_ACCOUNT,
    ValidationError,
    salary_columns_required,
)
from finport.domain.import_result import (
    BatchBuilder,
    BatchResult,
    ImportOutcome,
    run_import,
)
from finport.spreadsheet.reader import (
    Source,
    SpreadsheetReader,
    WorkbookReader,
    cell_text,
    is_row_empty,
)
from finport.utils.amount_parser import parse_amount
from finport.utils.date_parser import parse_cell_date
from finport.utils.employee_resolver import EmployeeResolver
from finport.utils.header_resolver import resolve_column

# Tax deducted at source, as a fraction of gross salary
TDS_RATE = 0.10

DATE_HEADER = "Date"
ACCOUNT_HEADER = "Account"
GROSS_HEADER = "Debit"


def compute_tds(gross_salary: float) -> tuple[float, float]:
    """Return (tds, net_salary) for a gross salary.

    Non-positive gross salaries carry no TDS.
    """
    tds = gross_salary * TDS_RATE if gross_salary > 0 else 0.0
    return tds, gross_salary - tds


class SalaryImportService:
    """Service for parsing salary sheets into draft salary entries.

    Every non-empty row becomes a draft; problems are attached as warnings
    for the reviewer instead of dropping the row.
    """

    def __init__(self, db: Optional[Database] = None, reader: Optional[SpreadsheetReader] = None):
        """Initialize salary import service.

        Args:
            db: Database instance used to load the employee directory
            reader: Spreadsheet reader (defaults to WorkbookReader)
        """
        self.db = db
        self.reader = reader or WorkbookReader()

    def parse(
        self,
        source: Source,
        filename: Optional[str] = None,
        employees: Optional[Iterable[Employee]] = None,
    ) -> ImportOutcome:
        """Parse an uploaded salary sheet.

        Args:
            source: Path or binary file object
            filename: Original file name, used to pick the file type
            employees: Known employees; loaded from the database when omitted

        Returns:
            BatchResult with the drafts, or ImportFailure
        """

        def parse() -> BatchResult:
            sheet = self.reader.read(source, filename)
            known = list(employees) if employees is not None else self._load_employees()
            return self.parse_sheet(sheet, known)

        return run_import("Salary import", parse)

    def _load_employees(self) -> list[Employee]:
        if self.db is None:
            return []
        return EmployeeService(self.db).list_employees()

    def parse_sheet(self, sheet: SheetData, employees: Iterable[Employee]) -> BatchResult:
        """Turn salary sheet rows into draft salary entries.

        The ``Date``, ``Account`` and ``Debit`` (gross salary) headers are
        located case-insensitively.

        Raises:
            ValidationError: If any of the three headers is missing
        """
        date_index = resolve_column(sheet.header, DATE_HEADER)
        account_index = resolve_column(sheet.header, ACCOUNT_HEADER)
        gross_index = resolve_column(sheet.header, GROSS_HEADER)
        if date_index is None or account_index is None or gross_index is None:
            raise ValidationError(salary_columns_required())

        resolver = EmployeeResolver(employees)
        builder = BatchBuilder()

        for row in sheet.rows:
            if is_row_empty(row.cells):
                continue

            salary_date = parse_cell_date(row.get(date_index))
            account = cell_text(row.get(account_index))
            gross_salary = parse_amount(row.get(gross_index))
            tds, net_salary = compute_tds(gross_salary)
            employee = resolver.resolve(account)

            warnings = []
            if salary_date is None:
                warnings.append(INVALID_DATE)
            if not account:
                warnings.append(MISSING_ACCOUNT)
            elif employee is None:
                warnings.append(EMPLOYEE_NOT_FOUND)
            if gross_salary <= 0:
                warnings.append(INVALID_GROSS_SALARY)

            builder.add(
                DraftSalaryEntry(
                    id=builder.next_id,
                    row_index=row.row_number,
                    date=salary_date,
                    account=account,
                    employee_id=employee.id if employee else None,
                    employee_name=employee.name if employee else None,
                    gross_salary=round(gross_salary, 2),
                    tds=round(tds, 2),
                    net_salary=round(net_salary, 2),
                    warnings=warnings,
                )
            )

        return builder.build()
