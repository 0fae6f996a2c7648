"""Services package."""

from employee_api.services.employee_service import EmployeePage, EmployeeService

__all__ = [
    "EmployeePage",
    "EmployeeService",
]
