"""Tests for resolving configured columns against header rows."""

import pytest

from finport.domain.entities import AmountFormatType, StatementFormat
from finport.domain.errors import ValidationError
from finport.utils.header_resolver import resolve_column, resolve_mapping


def _drcr_format(**overrides):
    fields = dict(
        bank_name="ICICI",
        date_column="Txn Date",
        description_column="Narration",
        amount_format_type=AmountFormatType.DRCR_WITH_AMOUNT,
        amount_column="Amount",
        drcr_column="Type",
        debit_tokens=("DR",),
        credit_tokens=("CR",),
    )
    fields.update(overrides)
    return StatementFormat(**fields)


def test_resolve_column_ignores_case_and_whitespace():
    """Header matching is trimmed and case-insensitive."""
    header = ["  TXN DATE ", "Narration", None, "Amount"]
    assert resolve_column(header, "txn date") == 0
    assert resolve_column(header, " Amount ") == 3
    assert resolve_column(header, "Balance") is None


def test_resolve_column_first_match_wins():
    """Duplicate headers resolve to the first one."""
    assert resolve_column(["Amount", "amount"], "AMOUNT") == 0


def test_resolve_mapping_drcr():
    """A dr/cr format maps amount and indicator columns."""
    mapping = resolve_mapping(["Txn Date", "Narration", "Amount", "Type"], _drcr_format())

    assert mapping.date == 0
    assert mapping.description == 1
    assert mapping.amount == 2
    assert mapping.drcr == 3
    assert mapping.debit is None
    assert mapping.transaction_id is None


def test_resolve_mapping_separate_columns():
    """A separate debit/credit format maps both amount columns."""
    fmt = StatementFormat(
        bank_name="HDFC",
        date_column="Date",
        description_column="Details",
        amount_format_type=AmountFormatType.SEPARATE_DEBIT_CREDIT,
        transaction_id_column="Ref",
        debit_column="Debit",
        credit_column="Credit",
    )
    mapping = resolve_mapping(["Ref", "Date", "Details", "Debit", "Credit"], fmt)

    assert (mapping.transaction_id, mapping.date, mapping.debit, mapping.credit) == (0, 1, 3, 4)


def test_resolve_mapping_missing_column_names_it():
    """The first missing configured column is reported by name."""
    with pytest.raises(ValidationError) as excinfo:
        resolve_mapping(["Txn Date", "Narration", "Amount"], _drcr_format())

    assert str(excinfo.value) == "Column 'Type' not found in Excel file"


def test_resolve_mapping_configured_transaction_id_must_exist():
    """An optional column becomes required once configured."""
    fmt = _drcr_format(transaction_id_column="Ref No")

    with pytest.raises(ValidationError, match="Column 'Ref No' not found"):
        resolve_mapping(["Txn Date", "Narration", "Amount", "Type"], fmt)
