"""Domain-specific exceptions for the employee API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses. Validation, repository and service code raise them for
expected conditions; the error handlers map each family to a status code.
"""

from typing import Any

from employee_api.utils.validation import ErrorDetail


class EmployeeAPIError(Exception):
    """Base exception for all employee API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Invalid Input Errors (400)
# =============================================================================


class InvalidInputError(EmployeeAPIError):
    """Raised when request data fails validation.

    Carries every offending field, never just the first one.
    """

    def __init__(self, errors: list[ErrorDetail], message: str = "Validation failed") -> None:
        self.errors = list(errors)
        super().__init__(message, {"errors": [error.as_dict() for error in self.errors]})


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(EmployeeAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: int | None = None) -> None:
        if employee_id is not None:
            message = f"Employee with id {employee_id} does not exist"
            details = {"employee_id": employee_id}
        else:
            message = "Employee not found"
            details = {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(EmployeeAPIError):
    """Base class for resource conflict errors."""

    pass


class EmailAlreadyExistsError(ConflictError):
    """Raised when another employee already uses the email."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Employee with this email already exists", details)


class EmployeeNumberAlreadyExistsError(ConflictError):
    """Raised when another employee already uses the employee number."""

    def __init__(self, employee_number: str | None = None) -> None:
        details = {"employee_number": employee_number} if employee_number else {}
        super().__init__("Employee with this employee number already exists", details)


class EmployeeAlreadyExistsError(ConflictError):
    """Raised on a uniqueness violation that maps to no known constraint."""

    def __init__(self) -> None:
        super().__init__("Employee already exists")


# =============================================================================
# Referenced Errors (409)
# =============================================================================


class EmployeeReferencedError(EmployeeAPIError):
    """Raised when an employee is still referenced and cannot be deleted."""

    def __init__(self, employee_id: int | None = None) -> None:
        details = {"employee_id": employee_id} if employee_id is not None else {}
        super().__init__("Employee is referenced by other records and cannot be deleted", details)
