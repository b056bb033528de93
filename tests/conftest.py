"""Shared pytest fixtures for finport tests."""

import tempfile
import os
from pathlib import Path
import pytest

from finport.database.factories import create_sqlite_database
from finport.domain.employee import EmployeeService
from finport.domain.statement_format import StatementFormatService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def format_service(temp_db):
    """Create a StatementFormatService with a temporary database."""
    return StatementFormatService(temp_db)


@pytest.fixture
def employee_service(temp_db):
    """Create an EmployeeService with a temporary database."""
    return EmployeeService(temp_db)


@pytest.fixture
def hdfc_format(format_service):
    """Saved separate debit/credit format matching fixtures/hdfc_statement.csv."""
    format_id = format_service.create_format(
        bank_name="HDFC",
        date_column="Txn Date",
        description_column="Narration",
        amount_format_type="separate_debit_credit",
        transaction_id_column="Chq./Ref.No.",
        debit_column="Withdrawal Amt.",
        credit_column="Deposit Amt.",
    )
    return format_service.get_format(format_id)


@pytest.fixture
def icici_format(format_service):
    """Saved dr/cr format matching fixtures/icici_statement.csv."""
    format_id = format_service.create_format(
        bank_name="ICICI",
        date_column="Txn Date",
        description_column="Narration",
        amount_format_type="drcr_with_amount",
        amount_column="Amount",
        drcr_column="Type",
        debit_tokens="DR",
        credit_tokens="CR",
    )
    return format_service.get_format(format_id)


@pytest.fixture
def sample_employees(employee_service):
    """Create the employees named in fixtures/salaries.csv."""
    john_id = employee_service.create_employee(name="John Doe", pan="abcde1234f")
    jane_id = employee_service.create_employee(name="Jane Smith")
    return {
        "John Doe": employee_service.get_employee(john_id),
        "Jane Smith": employee_service.get_employee(jane_id),
    }


@pytest.fixture
def cli_runner():
    """Create a CliRunner for testing CLI commands."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"
