"""Data Transfer Objects package."""

from employee_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
    PaginationMeta,
)
from employee_api.models.dto.error import ErrorDetailResponse, ErrorResponse

__all__ = [
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",
    "EmployeeListResponse",
    "PaginationMeta",
    "ErrorDetailResponse",
    "ErrorResponse",
]
