"""Statement format domain service (the per-bank format registry)."""

from dataclasses import replace
from typing import Any, Mapping, Optional

from finport.database.base import Database
from finport.domain.entities import AmountFormatType, StatementFormat
from finport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_format,
    format_id_not_found,
)
from finport.utils.tokens import normalize_tokens

# Request field names used by the upload form and the HTTP API.
REQUEST_FIELDS = {
    "bank_name": "bank_name",
    "date_col": "date_column",
    "desc_col": "description_column",
    "amount_format_type": "amount_format_type",
    "trans_id_col": "transaction_id_column",
    "debit_col": "debit_column",
    "credit_col": "credit_column",
    "amount_col": "amount_column",
    "drcr_col": "drcr_column",
    "debit_texts": "debit_tokens",
    "credit_texts": "credit_tokens",
}

REQUIRED_REQUEST_FIELDS = {
    AmountFormatType.SEPARATE_DEBIT_CREDIT: ("debit_col", "credit_col"),
    AmountFormatType.DRCR_WITH_AMOUNT: ("amount_col", "drcr_col", "debit_texts", "credit_texts"),
}


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required(value: Any, label: str) -> str:
    text = _clean(value)
    if text is None:
        raise ValidationError(f"The {label} field is required")
    return text


def parse_amount_format_type(value: Any) -> AmountFormatType:
    """Parse an amount format type name.

    Raises:
        ValidationError: If the name is not a known amount format type
    """
    if isinstance(value, AmountFormatType):
        return value
    try:
        return AmountFormatType(_clean(value))
    except ValueError:
        valid = ", ".join(sorted(t.value for t in AmountFormatType))
        raise ValidationError(
            f"Invalid amount format type '{value}'. Must be one of: {valid}"
        )


def build_format(
    bank_name: Any,
    date_column: Any,
    description_column: Any,
    amount_format_type: Any,
    transaction_id_column: Any = None,
    debit_column: Any = None,
    credit_column: Any = None,
    amount_column: Any = None,
    drcr_column: Any = None,
    debit_tokens: Any = None,
    credit_tokens: Any = None,
) -> StatementFormat:
    """Build a validated StatementFormat.

    Only the column group belonging to ``amount_format_type`` is kept; the
    other group is cleared. Token vocabularies are normalized.

    Raises:
        ValidationError: If a required field is missing, the type is unknown
            or a token vocabulary is empty
    """
    format_type = parse_amount_format_type(amount_format_type)
    common = dict(
        bank_name=_required(bank_name, "bank_name"),
        date_column=_required(date_column, "date_column"),
        description_column=_required(description_column, "description_column"),
        amount_format_type=format_type,
        transaction_id_column=_clean(transaction_id_column),
    )

    if format_type == AmountFormatType.SEPARATE_DEBIT_CREDIT:
        return StatementFormat(
            **common,
            debit_column=_required(debit_column, "debit_column"),
            credit_column=_required(credit_column, "credit_column"),
        )

    debit = normalize_tokens(debit_tokens)
    credit = normalize_tokens(credit_tokens)
    if not debit:
        raise ValidationError("At least one debit token is required for drcr_with_amount formats")
    if not credit:
        raise ValidationError("At least one credit token is required for drcr_with_amount formats")

    return StatementFormat(
        **common,
        amount_column=_required(amount_column, "amount_column"),
        drcr_column=_required(drcr_column, "drcr_column"),
        debit_tokens=debit,
        credit_tokens=credit,
    )


def format_from_fields(fields: Mapping[str, Any]) -> StatementFormat:
    """Build an unsaved StatementFormat from upload form fields.

    Field names follow the upload form (``date_col``, ``desc_col``,
    ``debit_texts``, ...). Missing required fields are reported by their
    form name.

    Raises:
        ValidationError: If a field required for the chosen type is missing
    """
    for name in ("bank_name", "date_col", "desc_col", "amount_format_type"):
        _required(fields.get(name), name)
    format_type = parse_amount_format_type(fields.get("amount_format_type"))
    for name in REQUIRED_REQUEST_FIELDS[format_type]:
        _required(fields.get(name), name)

    return build_format(
        **{attr: fields.get(name) for name, attr in REQUEST_FIELDS.items()}
    )


class StatementFormatService:
    """Service for managing statement formats."""

    def __init__(self, db: Database):
        """Initialize statement format service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_format(self, **fields: Any) -> int:
        """Create a new statement format.

        Args:
            **fields: Keyword arguments accepted by ``build_format``

        Returns:
            Format ID

        Raises:
            ValidationError: If the format is incomplete or inconsistent
            ConflictError: If the bank already has a format
        """
        fmt = build_format(**fields)
        if self.db.get_statement_format_by_bank(fmt.bank_name) is not None:
            raise ConflictError(duplicate_format(fmt.bank_name))
        return self.db.create_statement_format(fmt)

    def get_format(self, format_id: int) -> Optional[StatementFormat]:
        """Get statement format by ID.

        Args:
            format_id: Format ID

        Returns:
            Format entity or None if not found
        """
        return self.db.get_statement_format(format_id)

    def get_format_by_bank(self, bank_name: str) -> Optional[StatementFormat]:
        """Get statement format by bank name.

        Args:
            bank_name: Bank name, matched case-insensitively

        Returns:
            Format entity or None if not found
        """
        return self.db.get_statement_format_by_bank(bank_name)

    def list_formats(self) -> list[StatementFormat]:
        """List statement formats.

        Returns:
            List of format entities
        """
        return self.db.list_statement_formats()

    def update_format(self, format_id: int, **changes: Any) -> StatementFormat:
        """Update statement format fields.

        Fields not given keep their stored value. Switching
        ``amount_format_type`` requires the columns of the new type.

        Args:
            format_id: Format ID to update
            **changes: Fields to change, named as in ``build_format``

        Returns:
            The updated format

        Raises:
            NotFoundError: If the format does not exist
            ConflictError: If the new bank name is taken
            ValidationError: If the result is incomplete or inconsistent
        """
        current = self.db.get_statement_format(format_id)
        if current is None:
            raise NotFoundError(format_id_not_found(format_id))

        merged = replace(current, **{k: v for k, v in changes.items() if v is not None})
        fmt = build_format(
            bank_name=merged.bank_name,
            date_column=merged.date_column,
            description_column=merged.description_column,
            amount_format_type=merged.amount_format_type,
            transaction_id_column=merged.transaction_id_column,
            debit_column=merged.debit_column,
            credit_column=merged.credit_column,
            amount_column=merged.amount_column,
            drcr_column=merged.drcr_column,
            debit_tokens=merged.debit_tokens,
            credit_tokens=merged.credit_tokens,
        )

        existing = self.db.get_statement_format_by_bank(fmt.bank_name)
        if existing is not None and existing.id != format_id:
            raise ConflictError(duplicate_format(fmt.bank_name))

        self.db.update_statement_format(format_id, fmt)
        return replace(fmt, id=format_id, created_at=current.created_at)

    def delete_format(self, format_id: int) -> None:
        """Delete a statement format.

        Args:
            format_id: Format ID to delete

        Raises:
            NotFoundError: If format doesn't exist
        """
        if self.db.get_statement_format(format_id) is None:
            raise NotFoundError(format_id_not_found(format_id))
        self.db.delete_statement_format(format_id)
