"""Error response DTOs."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorDetailResponse(BaseModel):
    """A single offending field."""

    field: str
    message: str
    rejected_value: str | None = Field(default=None, serialization_alias="rejectedValue")


class ErrorResponse(BaseModel):
    """Standard error body returned for every failed request."""

    status: int
    error: str
    message: str
    timestamp: datetime
    path: str
    errors: list[ErrorDetailResponse] | None = None
