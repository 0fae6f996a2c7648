"""Domain models package."""

from employee_api.models.domain.employee import Employee, EmployeeFilter, EmployeeStatus

__all__ = [
    "Employee",
    "EmployeeFilter",
    "EmployeeStatus",
]
