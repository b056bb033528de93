"""Domain layer for finport application."""

# Services are imported lazily: utils and database import domain entities,
# and the services import utils and database.
_SERVICES = {
    "StatementFormatService": "finport.domain.statement_format",
    "EmployeeService": "finport.domain.employee",
    "StatementImportService": "finport.domain.statement_import",
    "SalaryImportService": "finport.domain.salary_import",
    "TdsReportService": "finport.domain.tds",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
