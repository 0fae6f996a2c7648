"""Employee service: business rules on top of the employee repository."""

import logging
import math
from dataclasses import dataclass, field

from employee_api.exceptions import ConflictError, InvalidInputError
from employee_api.models.domain.employee import Employee, EmployeeFilter, EmployeeStatus
from employee_api.models.orm.base import utcnow
from employee_api.repositories.employee_repository import AbstractEmployeeRepository
from employee_api.utils.validation import ValidationResult, validate_employee, validate_employment

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Largest row offset storage accepts (signed 64-bit)
MAX_OFFSET = 2**63 - 1


def normalize_pagination(page: int | None, page_size: int | None) -> tuple[int, int]:
    """Clamp paging input to usable values.

    Page below 1 (or missing) becomes 1. Page size below 1 (or missing)
    becomes the default; anything above the maximum is capped. Page is
    capped so the resulting offset stays within MAX_OFFSET.

    Args:
        page: Requested 1-based page
        page_size: Requested page size

    Returns:
        Tuple of (page, page_size)
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if page_size is None or page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    elif page_size > MAX_PAGE_SIZE:
        page_size = MAX_PAGE_SIZE

    max_page = MAX_OFFSET // page_size + 1
    if page > max_page:
        page = max_page
    return page, page_size


def calculate_total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show ``total`` records."""
    return math.ceil(total / page_size) if page_size > 0 else 0


@dataclass
class EmployeePage:
    """One page of an employee listing."""

    records: list[Employee] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return calculate_total_pages(self.total, self.page_size)


def _validate_fields(employee: Employee) -> ValidationResult:
    return validate_employee(
        employee.email,
        employee.employee_number,
        employee.first_name,
        employee.last_name,
    )


def _raise_if_invalid(result: ValidationResult) -> None:
    if not result.is_valid:
        raise InvalidInputError(result.errors)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, repository: AbstractEmployeeRepository) -> None:
        """Initialize service with an employee repository."""
        self.repository = repository

    async def create(self, employee: Employee) -> Employee:
        """Create an employee.

        Fields are validated first. Status and hire date are then always
        set by the service, whatever the caller supplied.

        Args:
            employee: Employee data

        Returns:
            The persisted employee

        Raises:
            InvalidInputError: If required fields are missing or malformed
            ConflictError: If the email or employee number is taken
        """
        _raise_if_invalid(_validate_fields(employee))

        employee.status = EmployeeStatus.ACTIVE
        employee.hire_date = utcnow()

        try:
            created = await self.repository.create(employee)
        except ConflictError as e:
            logger.warning(f"Employee create rejected: {e.message}")
            raise

        logger.info(f"Created employee {created.id}")
        return created

    async def find_by_id(self, employee_id: int) -> Employee:
        """Get an employee by ID.

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """
        return await self.repository.find_by_id(employee_id)

    async def find_all(
        self,
        page: int | None = None,
        page_size: int | None = None,
        filters: EmployeeFilter | None = None,
    ) -> EmployeePage:
        """List employees page by page.

        Args:
            page: Requested 1-based page, normalized here
            page_size: Requested page size, normalized here
            filters: Optional equality filters

        Returns:
            EmployeePage with the records and the total matching count
        """
        page, page_size = normalize_pagination(page, page_size)
        offset = (page - 1) * page_size

        records = await self.repository.find_all(limit=page_size, offset=offset, filters=filters)
        total = await self.repository.count(filters)

        return EmployeePage(records=records, total=total, page=page, page_size=page_size)

    async def update(self, employee: Employee) -> Employee:
        """Replace an existing employee.

        ``employee.id`` must already be set from the request path. Status and
        hire date are required here, and reported along with the other fields.

        Raises:
            InvalidInputError: If required fields are missing or malformed
            EmployeeNotFoundError: If no employee has this id
            ConflictError: If the email or employee number is taken
        """
        if employee.id is None:
            raise ValueError("Employee id must be set before update")

        _raise_if_invalid(
            validate_employment(_validate_fields(employee), employee.status, employee.hire_date)
        )

        try:
            updated = await self.repository.update(employee)
        except ConflictError as e:
            logger.warning(f"Employee {employee.id} update rejected: {e.message}")
            raise

        logger.info(f"Updated employee {updated.id}")
        return updated

    async def delete(self, employee_id: int) -> None:
        """Delete an employee.

        Raises:
            EmployeeNotFoundError: If no employee has this id
            EmployeeReferencedError: If other records still reference it
        """
        await self.repository.delete(employee_id)
        logger.info(f"Deleted employee {employee_id}")
