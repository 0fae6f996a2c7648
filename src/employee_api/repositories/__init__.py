"""Repositories package."""

from employee_api.repositories.base import BaseRepository
from employee_api.repositories.employee_repository import (
    AbstractEmployeeRepository,
    EmployeeRepository,
)

__all__ = [
    "BaseRepository",
    "AbstractEmployeeRepository",
    "EmployeeRepository",
]
