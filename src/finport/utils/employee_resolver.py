"""Utility for resolving free-text account names to employees."""

from typing import Iterable, Optional

from finport.domain.entities import Employee


def normalize_name(name: Optional[str]) -> str:
    """Normalize a name for matching (trim, lower-case)."""
    return name.strip().lower() if name else ""


class EmployeeResolver:
    """Case-insensitive exact-name lookup over a fixed set of employees.

    The name map is built once, so one resolver serves a whole import call.
    When two employees share a normalized name the later one wins.
    """

    def __init__(self, employees: Iterable[Employee]):
        self._by_name: dict[str, Employee] = {}
        for employee in employees:
            key = normalize_name(employee.name)
            if key:
                self._by_name[key] = employee

    def __len__(self) -> int:
        return len(self._by_name)

    def resolve(self, account: Optional[str]) -> Optional[Employee]:
        """Return the employee named ``account``, or None.

        No fuzzy matching: "Jon Doe" does not resolve to "John Doe".
        """
        key = normalize_name(account)
        if not key:
            return None
        return self._by_name.get(key)
