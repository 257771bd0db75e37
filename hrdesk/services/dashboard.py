"""Dashboard metrics computed from the employees table."""

import calendar
from datetime import date

from sqlalchemy.orm import Session

from hrdesk.models.employee import Employee
from hrdesk.schemas.dashboard import DashboardMetrics


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day of the calendar month containing today."""
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def get_dashboard_metrics(db: Session, today: date | None = None) -> DashboardMetrics:
    today = today or date.today()
    first, last = month_bounds(today)
    total = db.query(Employee).count()
    new_hires = (
        db.query(Employee)
        .filter(Employee.hire_date >= first, Employee.hire_date <= last)
        .count()
    )
    return DashboardMetrics(total_employees=total, new_hires_this_month=new_hires)
