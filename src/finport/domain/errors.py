"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input, unusable file or a format that does not fit the file."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


INVALID_DATE = "Invalid date"
MISSING_ACCOUNT = "Missing account"
EMPLOYEE_NOT_FOUND = "Employee not found"
INVALID_GROSS_SALARY = "Invalid gross salary"


def file_empty_or_invalid() -> str:
    """Return message for a workbook without any rows."""
    return "File is empty or invalid"


def unsupported_file_type(filename: str) -> str:
    """Return message for an upload that is not xlsx, xls or csv."""
    return f"Unsupported file type '{filename}'. Expected .xlsx, .xls or .csv"


def column_not_found(column_name: str) -> str:
    """Return message for a configured column missing from the header row."""
    return f"Column '{column_name}' not found in Excel file"


def salary_columns_required() -> str:
    """Return message for a salary sheet lacking its fixed headers."""
    return "Columns 'Date', 'Account', and 'Debit' are required in the Excel file"


def failed_to_parse(error: Exception) -> str:
    """Return message for an unexpected failure while parsing a file."""
    return f"Failed to parse file: {error}"


def format_not_found(bank_name: str) -> str:
    """Return message for missing statement format by bank name."""
    return f"Statement format for bank '{bank_name}' not found"


def format_id_not_found(format_id: int) -> str:
    """Return message for missing statement format by ID."""
    return f"Statement format {format_id} not found"


def duplicate_format(bank_name: str) -> str:
    """Return message when a bank already has a statement format."""
    return f"Statement format for bank '{bank_name}' already exists"


def employee_not_found(employee_id: int) -> str:
    """Return message for missing employee."""
    return f"Employee {employee_id} not found"


def duplicate_employee(name: str) -> str:
    """Return message for duplicate employee name."""
    return f"Employee with name '{name}' already exists"
