"""Request/response schemas for employee endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_serializer

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# Columns the list endpoint may sort by; anything else falls back to first_name.
SORTABLE_FIELDS = (
    "id",
    "first_name",
    "last_name",
    "email",
    "phone",
    "hire_date",
    "job_title",
    "department",
    "salary",
    "created_at",
    "updated_at",
)
DEFAULT_SORT_FIELD = "first_name"

SortOrder = Literal["asc", "desc"]


class EmployeeCreate(BaseModel):
    """Fields required to hire a new employee."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    phone: str | None = Field(default=None, max_length=64)
    hire_date: date
    job_title: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    salary: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class EmployeeUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=320, pattern=EMAIL_PATTERN)
    phone: str | None = Field(default=None, max_length=64)
    hire_date: date | None = None
    job_title: str | None = Field(default=None, min_length=1, max_length=255)
    department: str | None = Field(default=None, min_length=1, max_length=255)
    salary: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class EmployeeOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None
    hire_date: date
    job_title: str
    department: str
    salary: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

    @field_serializer("salary")
    def serialize_salary(self, v: Decimal) -> float:
        return float(v)


class EmployeeQuery(BaseModel):
    """Pagination, search and sort parameters for the employee list."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    search: str = Field(default="", max_length=255)
    sort_field: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = "asc"


class EmployeeListResponse(BaseModel):
    total: int
    page: int
    limit: int
    data: list[EmployeeOut]
