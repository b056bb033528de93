"""Bank statement import domain service."""

from typing import NamedTuple, Optional

from finport.database.base import Database
from finport.domain.entities import (
    DraftTransaction,
    FieldMapping,
    RawRow,
    SheetData,
    StatementFormat,
    TransactionType,
)
from finport.domain.errors import INVALID_DATE, NotFoundError, format_not_found
from finport.domain.import_result import (
    BatchBuilder,
    BatchResult,
    ImportOutcome,
    run_import,
)
from finport.domain.statement_format import StatementFormatService
from finport.spreadsheet.reader import (
    Source,
    SpreadsheetReader,
    WorkbookReader,
    cell_text,
    is_row_empty,
)
from finport.utils.amount_parser import parse_amount
from finport.utils.date_parser import parse_cell_date
from finport.utils.header_resolver import resolve_mapping
from finport.utils.tokens import classify_indicator, normalize_indicator, normalize_tokens

NO_AMOUNT = "Missing both debit and credit values"
ZERO_AMOUNT = "Zero amount"


class Classification(NamedTuple):
    type: TransactionType
    amount: float
    debit: float
    credit: float


def classify_debit_credit(row: RawRow, mapping: FieldMapping) -> tuple[Optional[Classification], str]:
    """Classify a row from separate debit and credit columns.

    Returns:
        (classification, "") or (None, reason the row is skipped)
    """
    debit = parse_amount(row.get(mapping.debit))
    credit = parse_amount(row.get(mapping.credit))
    if debit == 0 and credit == 0:
        return None, NO_AMOUNT

    if credit > 0:
        return Classification(TransactionType.INCOME, credit, 0.0, credit), ""

    amount = abs(debit) if debit != 0 else abs(credit)
    return Classification(TransactionType.EXPENSE, amount, amount, 0.0), ""


def classify_drcr(
    row: RawRow,
    mapping: FieldMapping,
    debit_tokens: tuple[str, ...],
    credit_tokens: tuple[str, ...],
) -> tuple[Optional[Classification], str]:
    """Classify a row from an amount column plus a dr/cr indicator column.

    Tokens must already be normalized (see ``normalize_tokens``).

    Returns:
        (classification, "") or (None, reason the row is skipped)
    """
    amount = abs(parse_amount(row.get(mapping.amount)))
    if amount == 0:
        return None, ZERO_AMOUNT

    indicator = normalize_indicator(row.get(mapping.drcr))
    txn_type = classify_indicator(indicator, debit_tokens, credit_tokens)
    if txn_type is None:
        return None, f"Unrecognized debit/credit indicator '{indicator}'"

    if txn_type == TransactionType.EXPENSE:
        return Classification(txn_type, amount, amount, 0.0), ""
    return Classification(txn_type, amount, 0.0, amount), ""


class StatementImportService:
    """Service for parsing bank statements into draft transactions.

    Nothing is persisted: the drafts are returned for review, and confirmed
    rows are saved by the caller.
    """

    def __init__(self, db: Optional[Database] = None, reader: Optional[SpreadsheetReader] = None):
        """Initialize statement import service.

        Args:
            db: Database instance, needed only to look formats up by bank name
            reader: Spreadsheet reader (defaults to WorkbookReader)
        """
        self.db = db
        self.reader = reader or WorkbookReader()

    def parse(
        self, source: Source, fmt: StatementFormat, filename: Optional[str] = None
    ) -> ImportOutcome:
        """Parse an uploaded statement with the given format.

        Args:
            source: Path or binary file object
            fmt: Statement format describing the file's columns
            filename: Original file name, used to pick the file type

        Returns:
            BatchResult with the drafts, or ImportFailure
        """
        return run_import(
            f"Statement import for '{fmt.bank_name}'",
            lambda: self.parse_sheet(self.reader.read(source, filename), fmt),
        )

    def parse_with_bank(
        self, source: Source, bank_name: str, filename: Optional[str] = None
    ) -> ImportOutcome:
        """Parse an uploaded statement using the bank's saved format.

        Returns:
            BatchResult with the drafts, or ImportFailure (also when the bank
            has no saved format)
        """

        def parse() -> BatchResult:
            if self.db is None:
                raise NotFoundError(format_not_found(bank_name))
            fmt = StatementFormatService(self.db).get_format_by_bank(bank_name)
            if fmt is None:
                raise NotFoundError(format_not_found(bank_name))
            return self.parse_sheet(self.reader.read(source, filename), fmt)

        return run_import(f"Statement import for '{bank_name}'", parse)

    def parse_sheet(self, sheet: SheetData, fmt: StatementFormat) -> BatchResult:
        """Turn sheet rows into draft transactions.

        Structurally empty rows are ignored. Rows without an amount, or with
        an indicator matching neither token vocabulary, are skipped and
        reported in ``BatchResult.skipped``. Rows with an unreadable date are
        kept with ``date=None`` and an "Invalid date" warning.

        Raises:
            ValidationError: If a configured column is missing from the header
        """
        mapping = resolve_mapping(sheet.header, fmt)
        debit_tokens = normalize_tokens(fmt.debit_tokens)
        credit_tokens = normalize_tokens(fmt.credit_tokens)
        builder = BatchBuilder()

        for row in sheet.rows:
            if is_row_empty(row.cells):
                continue

            if fmt.is_drcr:
                classification, reason = classify_drcr(row, mapping, debit_tokens, credit_tokens)
            else:
                classification, reason = classify_debit_credit(row, mapping)
            if classification is None:
                builder.skip(row.row_number, reason)
                continue

            warnings = []
            txn_date = parse_cell_date(row.get(mapping.date))
            if txn_date is None:
                warnings.append(INVALID_DATE)

            builder.add(
                DraftTransaction(
                    id=builder.next_id,
                    row_index=row.row_number,
                    date=txn_date,
                    description=cell_text(row.get(mapping.description)),
                    transaction_id=cell_text(row.get(mapping.transaction_id)),
                    amount=classification.amount,
                    debit=classification.debit,
                    credit=classification.credit,
                    type=classification.type,
                    warnings=warnings,
                )
            )

        return builder.build()
