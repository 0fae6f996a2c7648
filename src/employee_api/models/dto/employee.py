"""Employee DTOs."""

from datetime import datetime

from pydantic import BaseModel, Field

from employee_api.models.domain.employee import Employee, EmployeeStatus


class EmployeeCreate(BaseModel):
    """DTO for creating an employee.

    Required-field rules are enforced by the service so that every missing
    field is reported at once; ``status`` and ``hireDate`` are ignored.
    """

    first_name: str = Field(default="", alias="firstName", max_length=255, description="First name")
    last_name: str = Field(default="", alias="lastName", max_length=255, description="Last name")
    email: str = Field(default="", max_length=255, description="Employee email address")
    employee_number: str = Field(
        default="", alias="employeeNumber", max_length=50, description="Unique employee number"
    )
    position: str = Field(default="", max_length=255, description="Job position")
    department: str = Field(default="", max_length=255, description="Department name")

    class Config:
        """Pydantic config."""

        populate_by_name = True

    def to_domain(self) -> Employee:
        """Build a not-yet-persisted domain record."""
        return Employee(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            employee_number=self.employee_number,
            position=self.position,
            department=self.department,
        )


class EmployeeUpdate(EmployeeCreate):
    """DTO for replacing an employee.

    Carries every mutable field. Missing ``status`` and ``hireDate`` are
    reported by the service together with the other field errors.
    """

    status: EmployeeStatus | None = Field(default=None, description="Employment status")
    hire_date: datetime | None = Field(default=None, alias="hireDate", description="Hire date")

    def to_domain(self, employee_id: int) -> Employee:
        """Build the replacement record for ``employee_id``."""
        return Employee(
            id=employee_id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            employee_number=self.employee_number,
            position=self.position,
            department=self.department,
            status=self.status,
            hire_date=self.hire_date,
        )


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: int
    first_name: str = Field(serialization_alias="firstName")
    last_name: str = Field(serialization_alias="lastName")
    email: str
    employee_number: str = Field(serialization_alias="employeeNumber")
    position: str
    department: str
    status: EmployeeStatus
    hire_date: datetime = Field(serialization_alias="hireDate")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    class Config:
        """Pydantic config."""

        from_attributes = True


class PaginationMeta(BaseModel):
    """Metadata describing one page of a listing."""

    current_page: int
    page_size: int
    total_pages: int
    total_records: int


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    data: list[EmployeeResponse]
    pagination: PaginationMeta
