"""Employee ORM model."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Identity, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.models.orm.base import Base, TimestampMixin

# Schema namespace for the employees table. Engines that cannot host schemas
# (SQLite in tests) remap it through ``schema_translate_map``.
EMPLOYEE_SCHEMA = "employee"

# Constraint names match PostgreSQL's defaults for inline UNIQUE columns so
# that tables created outside this service are recognized too.
EMAIL_UNIQUE_CONSTRAINT = "employees_email_key"
EMPLOYEE_NUMBER_UNIQUE_CONSTRAINT = "employees_employee_number_key"


class EmployeeORM(Base, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    # SQLite only autoincrements a column declared exactly INTEGER
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        Identity(always=True),
        primary_key=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    employee_number: Mapped[str] = mapped_column(String(50), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    hire_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
        UniqueConstraint("employee_number", name=EMPLOYEE_NUMBER_UNIQUE_CONSTRAINT),
        Index("idx_employees_department", "department"),
        Index("idx_employees_status", "status"),
        Index("idx_employees_created_at", "created_at"),
        {"schema": EMPLOYEE_SCHEMA, "sqlite_autoincrement": True},
    )
