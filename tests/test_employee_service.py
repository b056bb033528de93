"""Domain tests for the employee directory."""

import pytest

from finport.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_employee(employee_service):
    """Names are trimmed and PANs upper-cased."""
    employee_id = employee_service.create_employee(name="  John Doe ", pan=" abcde1234f ")

    employee = employee_service.get_employee(employee_id)
    assert employee.name == "John Doe"
    assert employee.pan == "ABCDE1234F"


def test_create_employee_without_pan(employee_service):
    """PAN is optional."""
    employee_id = employee_service.create_employee(name="Jane Smith", pan="  ")

    assert employee_service.get_employee(employee_id).pan is None


def test_create_employee_blank_name(employee_service):
    """Blank names are rejected."""
    with pytest.raises(ValidationError):
        employee_service.create_employee(name="   ")


def test_create_employee_duplicate_name(employee_service, sample_employees):
    """Names that would match the same account conflict."""
    with pytest.raises(ConflictError, match="already exists"):
        employee_service.create_employee(name="JOHN DOE")


def test_list_employees_sorted_by_name(employee_service, sample_employees):
    """Employees are listed alphabetically."""
    names = [emp.name for emp in employee_service.list_employees()]
    assert names == ["Jane Smith", "John Doe"]


def test_delete_employee(employee_service, sample_employees):
    """Deleted employees are gone."""
    john = sample_employees["John Doe"]
    employee_service.delete_employee(john.id)

    assert employee_service.get_employee(john.id) is None
    with pytest.raises(NotFoundError):
        employee_service.delete_employee(john.id)
