"""Pydantic schema for dashboard metrics."""

from pydantic import BaseModel, Field


class DashboardMetrics(BaseModel):
    total_employees: int = Field(..., ge=0)
    new_hires_this_month: int = Field(..., ge=0, description="Hire date within the current calendar month")
