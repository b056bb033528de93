"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including how token vocabularies
are flattened into a single column.
"""

from finport.domain import entities as domain
from finport.database.models import (
    StatementFormat as ORMStatementFormat,
    Employee as ORMEmployee,
)


def tokens_to_column(tokens: tuple[str, ...]) -> str:
    """Flatten a normalized token tuple for storage."""
    return ",".join(tokens)


def tokens_from_column(value: str | None) -> tuple[str, ...]:
    """Split a stored token column back into a tuple."""
    if not value:
        return ()
    return tuple(token for token in value.split(",") if token)


def statement_format_to_domain(orm_format: ORMStatementFormat) -> domain.StatementFormat:
    """Convert SQLAlchemy StatementFormat model to domain StatementFormat entity."""
    return domain.StatementFormat(
        id=orm_format.id,
        bank_name=orm_format.bank_name,
        date_column=orm_format.date_column,
        description_column=orm_format.description_column,
        transaction_id_column=orm_format.transaction_id_column,
        amount_format_type=domain.AmountFormatType(orm_format.amount_format_type),
        debit_column=orm_format.debit_column,
        credit_column=orm_format.credit_column,
        amount_column=orm_format.amount_column,
        drcr_column=orm_format.drcr_column,
        debit_tokens=tokens_from_column(orm_format.debit_tokens),
        credit_tokens=tokens_from_column(orm_format.credit_tokens),
        created_at=orm_format.created_at,
    )


def apply_statement_format(orm_format: ORMStatementFormat, fmt: domain.StatementFormat) -> None:
    """Copy the editable fields of a domain format onto an ORM row."""
    orm_format.bank_name = fmt.bank_name
    orm_format.date_column = fmt.date_column
    orm_format.description_column = fmt.description_column
    orm_format.transaction_id_column = fmt.transaction_id_column
    orm_format.amount_format_type = fmt.amount_format_type.value
    orm_format.debit_column = fmt.debit_column
    orm_format.credit_column = fmt.credit_column
    orm_format.amount_column = fmt.amount_column
    orm_format.drcr_column = fmt.drcr_column
    orm_format.debit_tokens = tokens_to_column(fmt.debit_tokens)
    orm_format.credit_tokens = tokens_to_column(fmt.credit_tokens)


def employee_to_domain(orm_employee: ORMEmployee) -> domain.Employee:
    """Convert SQLAlchemy Employee model to domain Employee entity."""
    return domain.Employee(
        id=orm_employee.id,
        name=orm_employee.name,
        pan=orm_employee.pan,
        created_at=orm_employee.created_at,
    )
