"""Employee domain service."""

from typing import Optional

from finport.database.base import Database
from finport.domain.entities import Employee as EmployeeEntity
from finport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_employee,
    employee_not_found,
)
from finport.utils.employee_resolver import normalize_name


class EmployeeService:
    """Service for managing the employee directory used by salary imports."""

    def __init__(self, db: Database):
        """Initialize employee service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_employee(self, name: str, pan: Optional[str] = None) -> int:
        """Create a new employee.

        Args:
            name: Employee name as it appears in salary sheets
            pan: Optional PAN (tax ID)

        Returns:
            Employee ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If an employee with the same name exists
        """
        name = name.strip() if name else ""
        if not name:
            raise ValidationError("Employee name must not be empty")

        for emp in self.db.list_employees():
            if normalize_name(emp.name) == normalize_name(name):
                raise ConflictError(duplicate_employee(name))

        pan = pan.strip().upper() if pan and pan.strip() else None
        return self.db.create_employee(name=name, pan=pan)

    def get_employee(self, employee_id: int) -> Optional[EmployeeEntity]:
        """Get employee by ID."""
        return self.db.get_employee(employee_id)

    def list_employees(self) -> list[EmployeeEntity]:
        """List all employees."""
        return self.db.list_employees()

    def delete_employee(self, employee_id: int) -> None:
        """Delete an employee.

        Raises:
            NotFoundError: If the employee does not exist
        """
        if self.db.get_employee(employee_id) is None:
            raise NotFoundError(employee_not_found(employee_id))
        self.db.delete_employee(employee_id)
