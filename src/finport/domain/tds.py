"""Quarterly TDS summary over salary drafts."""

from dataclasses import dataclass
from typing import Iterable, Optional

from finport.database.base import Database
from finport.domain.entities import DraftSalaryEntry
from finport.domain.errors import ValidationError
from finport.utils.date_parser import quarter_months, quarter_range

MIN_FY_START = 2000
MAX_FY_START = 2100


@dataclass(frozen=True)
class TdsReportRow:
    """TDS withheld from one employee, per month of the quarter."""

    employee_id: int
    name: str
    pan: str
    monthly_tds: tuple[float, ...]

    @property
    def total(self) -> float:
        return round(sum(self.monthly_tds), 2)


@dataclass(frozen=True)
class TdsReport:
    """TDS withheld in one fiscal-year quarter."""

    fy_start: int
    quarter: int
    label: str
    months: list[tuple[str, str]]
    rows: list[TdsReportRow]

    @property
    def monthly_totals(self) -> tuple[float, ...]:
        return tuple(
            round(sum(row.monthly_tds[i] for row in self.rows), 2)
            for i in range(len(self.months))
        )

    @property
    def file_name(self) -> str:
        return f"TDS_FY{self.fy_start}-{str(self.fy_start + 1)[-2:]}_{self.label}.xlsx"


class TdsReportService:
    """Service for summarizing withheld tax by employee and month."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize TDS report service.

        Args:
            db: Database instance used to look up employee PANs
        """
        self.db = db

    def summarize(
        self, entries: Iterable[DraftSalaryEntry], fy_start: int, quarter: int
    ) -> TdsReport:
        """Group salary drafts of one quarter by employee and month.

        Entries without a resolved employee or without a date, and entries
        outside the quarter, are left out.

        Args:
            entries: Salary drafts
            fy_start: Calendar year in which the fiscal year begins (April)
            quarter: Quarter number, 1-4

        Returns:
            TdsReport with one row per employee, in order of first payment

        Raises:
            ValidationError: If fy_start or quarter is out of range
        """
        if not MIN_FY_START <= fy_start <= MAX_FY_START:
            raise ValidationError(
                f"Fiscal year must be between {MIN_FY_START} and {MAX_FY_START}"
            )
        try:
            start_date, end_date, label = quarter_range(fy_start, quarter)
        except ValueError as e:
            raise ValidationError(str(e))

        months = quarter_months(fy_start, quarter)
        month_keys = [key for key, _ in months]
        start, end = start_date.isoformat(), end_date.isoformat()

        in_quarter = sorted(
            (
                e
                for e in entries
                if e.employee_id is not None and e.date is not None and start <= e.date <= end
            ),
            key=lambda e: e.date,
        )

        grouped: dict[int, dict[str, float]] = {}
        names: dict[int, str] = {}
        for entry in in_quarter:
            monthly = grouped.setdefault(entry.employee_id, {key: 0.0 for key in month_keys})
            monthly[entry.date[:7]] += entry.tds
            names.setdefault(entry.employee_id, entry.employee_name or entry.account)

        rows = [
            TdsReportRow(
                employee_id=employee_id,
                name=names[employee_id],
                pan=self._pan(employee_id),
                monthly_tds=tuple(round(monthly[key], 2) for key in month_keys),
            )
            for employee_id, monthly in grouped.items()
        ]
        return TdsReport(
            fy_start=fy_start, quarter=quarter, label=label, months=months, rows=rows
        )

    def _pan(self, employee_id: int) -> str:
        if self.db is None:
            return ""
        employee = self.db.get_employee(employee_id)
        return (employee.pan or "") if employee else ""
