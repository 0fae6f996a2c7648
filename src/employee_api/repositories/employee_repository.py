"""Employee repository.

``AbstractEmployeeRepository`` is the persistence contract the service layer
depends on. ``EmployeeRepository`` implements it on a SQLAlchemy async
session and turns constraint violations into domain errors.
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy import ColumnElement, and_, delete, func, select, update
from sqlalchemy.exc import IntegrityError

from employee_api.exceptions import (
    EmailAlreadyExistsError,
    EmployeeAlreadyExistsError,
    EmployeeAPIError,
    EmployeeNotFoundError,
    EmployeeNumberAlreadyExistsError,
    EmployeeReferencedError,
)
from employee_api.models.domain.employee import Employee, EmployeeFilter
from employee_api.models.orm.base import utcnow
from employee_api.models.orm.employee import (
    EMAIL_UNIQUE_CONSTRAINT,
    EMPLOYEE_NUMBER_UNIQUE_CONSTRAINT,
    EmployeeORM,
)
from employee_api.repositories.base import BaseRepository
from employee_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

# SQLSTATE codes for integrity violations
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class AbstractEmployeeRepository(ABC):
    """Persistence contract for employee records."""

    @abstractmethod
    async def create(self, employee: Employee) -> Employee:
        """Insert an employee, writing the assigned id and timestamps back.

        Raises:
            EmailAlreadyExistsError: If the email is taken
            EmployeeNumberAlreadyExistsError: If the employee number is taken
            EmployeeAlreadyExistsError: On any other uniqueness violation
        """

    @abstractmethod
    async def find_by_id(self, employee_id: int) -> Employee:
        """Get one employee.

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """

    @abstractmethod
    async def find_all(
        self,
        limit: int,
        offset: int,
        filters: EmployeeFilter | None = None,
    ) -> list[Employee]:
        """List employees matching the filters, newest first."""

    @abstractmethod
    async def count(self, filters: EmployeeFilter | None = None) -> int:
        """Count employees matching the filters."""

    @abstractmethod
    async def update(self, employee: Employee) -> Employee:
        """Replace every mutable field of the employee with ``employee.id``.

        Raises:
            EmployeeNotFoundError: If no employee has this id
            EmailAlreadyExistsError: If the email is taken
            EmployeeNumberAlreadyExistsError: If the employee number is taken
        """

    @abstractmethod
    async def delete(self, employee_id: int) -> None:
        """Hard-delete an employee.

        Raises:
            EmployeeNotFoundError: If no employee has this id
            EmployeeReferencedError: If other rows still reference it
        """


def build_filter_clauses(filters: EmployeeFilter | None) -> list[ColumnElement[bool]]:
    """Build one bound equality condition per applied filter.

    Conditions are appended in the order department, status, position, so
    bind parameters are numbered in that order ahead of limit and offset.

    Args:
        filters: Optional listing filters

    Returns:
        List of conditions to combine with AND
    """
    clauses: list[ColumnElement[bool]] = []
    if filters is None:
        return clauses

    if filters.department:
        clauses.append(EmployeeORM.department == filters.department)

    if filters.status:
        clauses.append(EmployeeORM.status == filters.status.value)

    if filters.position:
        clauses.append(EmployeeORM.position == filters.position)

    return clauses


def _error_sources(error: IntegrityError) -> list[object]:
    """The DBAPI error and the driver exception it wraps, if any."""
    orig = error.orig
    sources: list[object] = [orig]
    cause = getattr(orig, "__cause__", None)
    if cause is not None:
        sources.append(cause)
    return sources


def _sqlstate(error: IntegrityError) -> str | None:
    for source in _error_sources(error):
        for attr in ("sqlstate", "pgcode"):
            value = getattr(source, attr, None)
            if isinstance(value, str):
                return value
    return None


def _constraint_name(error: IntegrityError) -> str | None:
    for source in _error_sources(error):
        # asyncpg exposes constraint_name directly, psycopg through diag
        name = getattr(source, "constraint_name", None)
        if name is None:
            name = getattr(getattr(source, "diag", None), "constraint_name", None)
        if isinstance(name, str):
            return name
    return None


def translate_integrity_error(
    error: IntegrityError,
    employee: Employee | None = None,
) -> EmployeeAPIError | None:
    """Map a storage integrity violation to a domain error.

    Args:
        error: The integrity error raised by the driver
        employee: Record being written, for error details

    Returns:
        The matching domain error, or None if the violation is not one
        this repository knows how to classify
    """
    constraint = _constraint_name(error)
    sqlstate = _sqlstate(error)
    message = str(error.orig).lower()

    if constraint == EMAIL_UNIQUE_CONSTRAINT or EMAIL_UNIQUE_CONSTRAINT in message or (
        "employees.email" in message
    ):
        return EmailAlreadyExistsError(employee.email if employee else None)

    if (
        constraint == EMPLOYEE_NUMBER_UNIQUE_CONSTRAINT
        or EMPLOYEE_NUMBER_UNIQUE_CONSTRAINT in message
        or "employees.employee_number" in message
    ):
        return EmployeeNumberAlreadyExistsError(employee.employee_number if employee else None)

    if sqlstate == UNIQUE_VIOLATION or "unique" in message or "duplicate" in message:
        return EmployeeAlreadyExistsError()

    if sqlstate == FOREIGN_KEY_VIOLATION or "foreign key" in message:
        return EmployeeReferencedError(employee.id if employee else None)

    return None


class EmployeeRepository(BaseRepository[EmployeeORM], AbstractEmployeeRepository):
    """Repository for employee operations."""

    model = EmployeeORM

    async def _handle_integrity_error(
        self,
        error: IntegrityError,
        operation: str,
        employee: Employee | None = None,
    ) -> EmployeeAPIError:
        """Roll back the failed statement and classify the violation.

        Unclassified violations are logged and re-raised unchanged.
        """
        await self.session.rollback()
        domain_error = translate_integrity_error(error, employee)
        if domain_error is None:
            log_error(logger, f"Unexpected integrity error during employee {operation}", error)
            raise error
        return domain_error

    async def create(self, employee: Employee) -> Employee:
        """Create an employee.

        Args:
            employee: Record to insert; id and timestamps are written back

        Returns:
            The same record, now persisted
        """
        instance = EmployeeORM(
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            employee_number=employee.employee_number,
            position=employee.position,
            department=employee.department,
            status=employee.status.value,
            hire_date=employee.hire_date,
        )
        self.session.add(instance)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise await self._handle_integrity_error(e, "create", employee) from e

        await self.session.refresh(instance)

        employee.id = instance.id
        employee.created_at = instance.created_at
        employee.updated_at = instance.updated_at
        return employee

    async def find_by_id(self, employee_id: int) -> Employee:
        """Get employee by ID.

        Args:
            employee_id: Employee primary key

        Returns:
            The employee

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """
        instance = await self.get(employee_id)
        if instance is None:
            raise EmployeeNotFoundError(employee_id)
        return Employee.model_validate(instance)

    async def find_all(
        self,
        limit: int,
        offset: int,
        filters: EmployeeFilter | None = None,
    ) -> list[Employee]:
        """Get employees with optional filters, most recently created first.

        Args:
            limit: Pagination limit
            offset: Pagination offset
            filters: Optional equality filters

        Returns:
            List of employees, empty if nothing matches
        """
        query = select(EmployeeORM)

        clauses = build_filter_clauses(filters)
        if clauses:
            query = query.where(and_(*clauses))

        query = (
            query.order_by(EmployeeORM.created_at.desc(), EmployeeORM.id.desc())
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(query)
        return [Employee.model_validate(row) for row in result.scalars().all()]

    async def count(self, filters: EmployeeFilter | None = None) -> int:
        """Count employees matching the filters.

        Args:
            filters: Optional equality filters

        Returns:
            Total count
        """
        query = select(func.count()).select_from(EmployeeORM)

        clauses = build_filter_clauses(filters)
        if clauses:
            query = query.where(and_(*clauses))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def update(self, employee: Employee) -> Employee:
        """Replace all mutable fields of an employee.

        Args:
            employee: Record with ``id`` set; timestamps are written back

        Returns:
            The same record, with storage timestamps

        Raises:
            EmployeeNotFoundError: If no employee has this id
        """
        query = (
            update(EmployeeORM)
            .where(EmployeeORM.id == employee.id)
            .values(
                first_name=employee.first_name,
                last_name=employee.last_name,
                email=employee.email,
                employee_number=employee.employee_number,
                position=employee.position,
                department=employee.department,
                status=employee.status.value,
                hire_date=employee.hire_date,
                updated_at=utcnow(),
            )
            .returning(EmployeeORM.created_at, EmployeeORM.updated_at)
        )
        try:
            result = await self.session.execute(query)
        except IntegrityError as e:
            raise await self._handle_integrity_error(e, "update", employee) from e

        row = result.one_or_none()
        if row is None:
            raise EmployeeNotFoundError(employee.id)

        employee.created_at = row.created_at
        employee.updated_at = row.updated_at
        return employee

    async def delete(self, employee_id: int) -> None:
        """Delete an employee by ID.

        Args:
            employee_id: Employee primary key

        Raises:
            EmployeeNotFoundError: If no employee has this id
            EmployeeReferencedError: If other rows still reference it
        """
        try:
            result = await self.session.execute(
                delete(EmployeeORM).where(EmployeeORM.id == employee_id)
            )
        except IntegrityError as e:
            domain_error = await self._handle_integrity_error(e, "delete")
            if isinstance(domain_error, EmployeeReferencedError):
                raise EmployeeReferencedError(employee_id) from e
            raise domain_error from e

        if result.rowcount == 0:
            raise EmployeeNotFoundError(employee_id)
