"""Employee domain model."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class EmployeeStatus(StrEnum):
    """Employee status enum."""

    ACTIVE = "ACTIVE"
    ON_VACATION = "ON_VACATION"
    RETIRED = "RETIRED"


class Employee(BaseModel):
    """Employee domain model.

    ``id``, ``created_at`` and ``updated_at`` are assigned by storage and
    stay ``None`` until the record has been persisted. ``status`` is ``None`` only on a replacement that omitted
    it, which validation rejects.
    """

    id: int | None = None
    first_name: str
    last_name: str
    email: str
    employee_number: str
    position: str = ""
    department: str = ""
    status: EmployeeStatus | None = EmployeeStatus.ACTIVE
    hire_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
        validate_assignment = True


@dataclass(frozen=True)
class EmployeeFilter:
    """Optional equality filters for employee listings.

    A field left as ``None`` (or empty) is not applied.
    """

    department: str | None = None
    status: EmployeeStatus | None = None
    position: str | None = None
