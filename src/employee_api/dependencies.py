"""Dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.database import get_db
from employee_api.repositories.employee_repository import (
    AbstractEmployeeRepository,
    EmployeeRepository,
)
from employee_api.services.employee_service import EmployeeService


def get_employee_repository(db: AsyncSession = Depends(get_db)) -> AbstractEmployeeRepository:
    """Get EmployeeRepository bound to the request session."""
    return EmployeeRepository(db)


def get_employee_service(
    repository: AbstractEmployeeRepository = Depends(get_employee_repository),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(repository)
