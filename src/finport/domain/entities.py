"""Domain model entities for finport.

These are pure data classes representing the import pipeline's business
concepts, independent of database schema and of the spreadsheet library used
to read uploaded files.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class AmountFormatType(str, Enum):
    """How a bank statement encodes the transaction amount."""

    SEPARATE_DEBIT_CREDIT = "separate_debit_credit"
    DRCR_WITH_AMOUNT = "drcr_with_amount"


class TransactionType(str, Enum):
    """Classification of a statement row."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class StatementFormat:
    """Per-bank column layout of a statement spreadsheet.

    Exactly one of the column groups is populated, matching
    ``amount_format_type``: ``debit_column``/``credit_column`` for
    separate debit/credit statements, ``amount_column``/``drcr_column`` plus
    the token vocabularies for single-amount statements.
    """

    bank_name: str
    date_column: str
    description_column: str
    amount_format_type: AmountFormatType
    transaction_id_column: Optional[str] = None
    debit_column: Optional[str] = None
    credit_column: Optional[str] = None
    amount_column: Optional[str] = None
    drcr_column: Optional[str] = None
    debit_tokens: tuple[str, ...] = ()
    credit_tokens: tuple[str, ...] = ()
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_drcr(self) -> bool:
        return self.amount_format_type == AmountFormatType.DRCR_WITH_AMOUNT


@dataclass(frozen=True)
class Employee:
    """Employee domain entity."""

    id: int
    name: str
    pan: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class RawRow:
    """One spreadsheet data row and its 1-based row number in the sheet."""

    row_number: int
    cells: tuple[Any, ...]

    def get(self, index: Optional[int]) -> Any:
        """Return the cell at ``index``, or None if absent or unmapped."""
        if index is None or index >= len(self.cells):
            return None
        return self.cells[index]


@dataclass(frozen=True)
class SheetData:
    """Header row and data rows of the first sheet of a workbook."""

    header: list[Optional[str]]
    rows: list[RawRow]


@dataclass(frozen=True)
class FieldMapping:
    """A statement format resolved against an actual header row."""

    date: int
    description: int
    transaction_id: Optional[int] = None
    debit: Optional[int] = None
    credit: Optional[int] = None
    amount: Optional[int] = None
    drcr: Optional[int] = None


@dataclass(frozen=True)
class DraftTransaction:
    """A parsed statement row awaiting review."""

    id: int
    row_index: int
    date: Optional[str]
    description: str
    transaction_id: str
    amount: float
    debit: float
    credit: float
    type: TransactionType
    category: str = ""
    notes: str = ""
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "row_index": self.row_index,
            "date": self.date,
            "description": self.description,
            "transaction_id": self.transaction_id,
            "amount": self.amount,
            "debit": self.debit,
            "credit": self.credit,
            "type": self.type.value,
            "category": self.category,
            "notes": self.notes,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class DraftSalaryEntry:
    """A parsed salary sheet row awaiting review."""

    id: int
    row_index: int
    date: Optional[str]
    account: str
    employee_id: Optional[int]
    employee_name: Optional[str]
    gross_salary: float
    tds: float
    net_salary: float
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "row_index": self.row_index,
            "date": self.date,
            "account": self.account,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "gross_salary": self.gross_salary,
            "tds": self.tds,
            "net_salary": self.net_salary,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class SkippedRow:
    """A statement row the classifier dropped, and why."""

    row_index: int
    reason: str
