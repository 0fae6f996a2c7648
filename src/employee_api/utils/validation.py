"""Input validation utilities for employee data and request parameters.

Validation never raises: callers get a result carrying every field error,
and decide how to surface it.
"""

import re
from dataclasses import dataclass, field
from typing import Any

import email_validator
from email_validator import EmailNotValidError, validate_email

# Maximum lengths for filter fields
MAX_FILTER_LENGTH = 255
MAX_STATUS_LENGTH = 50

# Signed 64-bit range, the widest key the table allows
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)
MAX_ID_DIGITS = len(str(MAX_ID))

# Practical email grammar: local@domain with an alphabetic TLD-like suffix
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# Base-10 integer with optional sign, ASCII digits only
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Internal domains such as corp.local are valid employee addresses; only the
# address syntax is checked
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


@dataclass(frozen=True)
class ErrorDetail:
    """A single field-level validation error."""

    field: str
    message: str
    rejected_value: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape, omitting an absent rejected value."""
        data: dict[str, Any] = {"field": self.field, "message": self.message}
        if self.rejected_value:
            data["rejectedValue"] = self.rejected_value
        return data


@dataclass
class ValidationResult:
    """Outcome of validating an employee payload."""

    is_valid: bool = True
    errors: list[ErrorDetail] = field(default_factory=list)

    def add(self, error: ErrorDetail) -> None:
        self.errors.append(error)
        self.is_valid = False


def is_valid_email(email: str) -> bool:
    """Check an email against the practical grammar and RFC 5322 parsing.

    Args:
        email: Raw email address

    Returns:
        True if the address is well formed
    """
    if not EMAIL_PATTERN.match(email):
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_employee(
    email: str,
    employee_number: str,
    first_name: str,
    last_name: str,
) -> ValidationResult:
    """Validate the required employee fields.

    All failures are accumulated in field order. Uniqueness is not checked
    here; storage reports it as a conflict.

    Args:
        email: Employee email address
        employee_number: Employee number
        first_name: First name
        last_name: Last name

    Returns:
        ValidationResult with every field error found
    """
    result = ValidationResult()

    if not email:
        result.add(ErrorDetail(field="email", message="Email is required"))
    elif not is_valid_email(email):
        result.add(
            ErrorDetail(field="email", message="Email format is invalid", rejected_value=email)
        )

    if not employee_number:
        result.add(ErrorDetail(field="employeeNumber", message="Employee number is required"))

    if not first_name.strip():
        result.add(ErrorDetail(field="firstName", message="First name is required"))

    if not last_name.strip():
        result.add(ErrorDetail(field="lastName", message="Last name is required"))

    return result


def validate_employment(
    result: ValidationResult,
    status: Any,
    hire_date: Any,
) -> ValidationResult:
    """Add errors for missing employment fields to an existing result.

    Replacements carry status and hire date; creation sets them itself.

    Args:
        result: Result of ``validate_employee`` for the same record
        status: Employment status, or None when absent
        hire_date: Hire date, or None when absent

    Returns:
        The same result, extended
    """
    if status is None:
        result.add(ErrorDetail(field="status", message="Status is required"))

    if hire_date is None:
        result.add(ErrorDetail(field="hireDate", message="Hire date is required"))

    return result


def validate_id(raw: str) -> tuple[int, list[ErrorDetail]]:
    """Parse a path identifier.

    Args:
        raw: Raw text from the path segment

    Returns:
        Tuple of (id, errors). On failure id is 0 and errors is non-empty.
    """
    invalid = [ErrorDetail(field="id", message="ID must be a valid integer", rejected_value=raw)]

    # int() refuses strings beyond a few thousand digits
    if not INTEGER_PATTERN.fullmatch(raw) or len(raw.lstrip("+-").lstrip("0")) > MAX_ID_DIGITS:
        return 0, invalid

    value = int(raw)
    if not MIN_ID <= value <= MAX_ID:
        return 0, invalid

    if value <= 0:
        return 0, [ErrorDetail(field="id", message="ID must be a positive number")]

    return value, []


def sanitize_filter_text(value: str | None, max_length: int = MAX_FILTER_LENGTH) -> str | None:
    """Sanitize a free-text equality filter (department, position).

    Args:
        value: Raw filter string
        max_length: Maximum allowed length

    Returns:
        Stripped filter value, or None when nothing is left to filter on
    """
    if value is None:
        return None

    value = value[:max_length].strip()
    return value or None


def sanitize_status(status: str | None, allowed_values: set[str] | None = None) -> str | None:
    """Sanitize status filter input.

    Args:
        status: Raw status string
        allowed_values: Optional set of allowed status values

    Returns:
        Normalized status string or None
    """
    if status is None:
        return None

    # Statuses are stored upper case
    status = status[:MAX_STATUS_LENGTH].strip().upper()

    if not status:
        return None

    if allowed_values and status not in allowed_values:
        return None

    return status
