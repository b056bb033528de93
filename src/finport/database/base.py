"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

from finport.domain.entities import Employee, StatementFormat


class Database(ABC):
    """Abstract database interface for finport."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Statement format operations
    @abstractmethod
    def create_statement_format(self, fmt: StatementFormat) -> int:
        """Store a new statement format. Returns format ID."""
        pass

    @abstractmethod
    def get_statement_format(self, format_id: int) -> Optional[StatementFormat]:
        """Get statement format by ID."""
        pass

    @abstractmethod
    def get_statement_format_by_bank(self, bank_name: str) -> Optional[StatementFormat]:
        """Get statement format by bank name (case-insensitive)."""
        pass

    @abstractmethod
    def list_statement_formats(self) -> list[StatementFormat]:
        """List all statement formats ordered by bank name."""
        pass

    @abstractmethod
    def update_statement_format(self, format_id: int, fmt: StatementFormat) -> None:
        """Replace the stored fields of a statement format."""
        pass

    @abstractmethod
    def delete_statement_format(self, format_id: int) -> None:
        """Delete a statement format."""
        pass

    # Employee operations
    @abstractmethod
    def create_employee(self, name: str, pan: Optional[str] = None) -> int:
        """Create an employee. Returns employee ID."""
        pass

    @abstractmethod
    def get_employee(self, employee_id: int) -> Optional[Employee]:
        """Get employee by ID."""
        pass

    @abstractmethod
    def list_employees(self) -> list[Employee]:
        """List all employees ordered by name."""
        pass

    @abstractmethod
    def delete_employee(self, employee_id: int) -> None:
        """Delete an employee."""
        pass
