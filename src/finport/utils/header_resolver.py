"""Utility for resolving configured column names against a header row."""

from typing import Any, Optional, Sequence

from finport.domain.entities import FieldMapping, StatementFormat
from finport.domain.errors import ValidationError, column_not_found


def normalize_header(value: Any) -> str:
    """Trim and lower-case a header cell or configured column name."""
    if value is None:
        return ""
    return str(value).strip().lower()


def resolve_column(header: Sequence[Any], column_name: str) -> Optional[int]:
    """Find the position of a column in the header row.

    Matching ignores case and surrounding whitespace; the first matching
    header cell wins.

    Args:
        header: Header row cells
        column_name: Configured column name

    Returns:
        Column index, or None if no header cell matches
    """
    search = normalize_header(column_name)
    for index, cell in enumerate(header):
        if normalize_header(cell) == search:
            return index
    return None


def require_column(header: Sequence[Any], column_name: str) -> int:
    """Resolve a column that must exist in the header row.

    Raises:
        ValidationError: If the column is not present
    """
    index = resolve_column(header, column_name)
    if index is None:
        raise ValidationError(column_not_found(column_name))
    return index


def resolve_mapping(header: Sequence[Any], fmt: StatementFormat) -> FieldMapping:
    """Resolve every configured column of a statement format.

    The transaction ID column is optional, but once configured it must be
    present like any other column.

    Args:
        header: Header row cells
        fmt: Statement format to resolve

    Returns:
        FieldMapping with fixed column indices

    Raises:
        ValidationError: Naming the first configured column that is missing
    """
    date_index = require_column(header, fmt.date_column)
    description_index = require_column(header, fmt.description_column)
    transaction_id_index = (
        require_column(header, fmt.transaction_id_column)
        if fmt.transaction_id_column
        else None
    )

    if fmt.is_drcr:
        return FieldMapping(
            date=date_index,
            description=description_index,
            transaction_id=transaction_id_index,
            amount=require_column(header, fmt.amount_column),
            drcr=require_column(header, fmt.drcr_column),
        )

    return FieldMapping(
        date=date_index,
        description=description_index,
        transaction_id=transaction_id_index,
        debit=require_column(header, fmt.debit_column),
        credit=require_column(header, fmt.credit_column),
    )
