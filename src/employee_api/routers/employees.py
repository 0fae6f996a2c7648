"""Employees router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from employee_api.dependencies import get_employee_service
from employee_api.exceptions import InvalidInputError
from employee_api.models.domain.employee import EmployeeFilter, EmployeeStatus
from employee_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
    PaginationMeta,
)
from employee_api.models.dto.error import ErrorResponse
from employee_api.services.employee_service import EmployeeService
from employee_api.utils.validation import (
    ErrorDetail,
    sanitize_filter_text,
    sanitize_status,
    validate_id,
)

router = APIRouter()

# Allowed status values for the listing filter
ALLOWED_EMPLOYEE_STATUSES = {s.value for s in EmployeeStatus}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Employee not found"},
    409: {"model": ErrorResponse, "description": "Conflict with existing employee"},
}


def parse_employee_id(employee_id: str) -> int:
    """Parse the raw path identifier.

    Raises:
        InvalidInputError: If it is not a positive integer
    """
    parsed, errors = validate_id(employee_id)
    if errors:
        raise InvalidInputError(errors, message="Invalid employee id")
    return parsed


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={code: ERROR_RESPONSES[code] for code in (400, 409)},
)
async def create_employee(
    data: EmployeeCreate,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create a new employee."""
    employee = await employee_service.create(data.to_domain())
    return EmployeeResponse.model_validate(employee)


@router.get(
    "",
    response_model=EmployeeListResponse,
    responses={400: ERROR_RESPONSES[400]},
)
async def list_employees(
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    page: int | None = None,
    page_size: int | None = None,
    department: str | None = Query(default=None, max_length=255),
    status: str | None = Query(default=None, max_length=50),
    position: str | None = Query(default=None, max_length=255),
) -> EmployeeListResponse:
    """List employees, newest first, with optional filters."""
    sanitized_status = sanitize_status(status, ALLOWED_EMPLOYEE_STATUSES)
    if status and status.strip() and sanitized_status is None:
        raise InvalidInputError(
            [
                ErrorDetail(
                    field="status",
                    message="Status must be one of " + ", ".join(sorted(ALLOWED_EMPLOYEE_STATUSES)),
                    rejected_value=status,
                )
            ],
            message="Invalid query parameters",
        )

    filters = EmployeeFilter(
        department=sanitize_filter_text(department),
        status=EmployeeStatus(sanitized_status) if sanitized_status else None,
        position=sanitize_filter_text(position),
    )

    result = await employee_service.find_all(page=page, page_size=page_size, filters=filters)

    return EmployeeListResponse(
        data=[EmployeeResponse.model_validate(emp) for emp in result.records],
        pagination=PaginationMeta(
            current_page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            total_records=result.total,
        ),
    )


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={code: ERROR_RESPONSES[code] for code in (400, 404)},
)
async def get_employee(
    employee_id: str,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get a single employee by ID."""
    employee = await employee_service.find_by_id(parse_employee_id(employee_id))
    return EmployeeResponse.model_validate(employee)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses=ERROR_RESPONSES,
)
async def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Replace an existing employee."""
    employee = await employee_service.update(data.to_domain(parse_employee_id(employee_id)))
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES,
)
async def delete_employee(
    employee_id: str,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> Response:
    """Delete an employee."""
    await employee_service.delete(parse_employee_id(employee_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
