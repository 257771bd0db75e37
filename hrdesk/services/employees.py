"""Employee persistence: create, read, update, delete, and a filtered/sorted/paginated list."""

import logging

from sqlalchemy import asc, desc, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hrdesk.core.errors import ConflictError, NotFoundError, ValidationError
from hrdesk.models.employee import Employee
from hrdesk.schemas.employee import (
    DEFAULT_SORT_FIELD,
    SORTABLE_FIELDS,
    EmployeeCreate,
    EmployeeQuery,
    EmployeeUpdate,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An employee with this e-mail already exists."
NULLABLE_FIELDS = frozenset({"phone"})

SEARCH_COLUMNS = (
    Employee.first_name,
    Employee.last_name,
    Employee.email,
    Employee.job_title,
    Employee.department,
)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term is matched as plain text."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e


def create_employee(db: Session, data: EmployeeCreate) -> Employee:
    employee = Employee(**data.model_dump())
    db.add(employee)
    _commit(db)
    db.refresh(employee)
    logger.info("Employee created", extra={"employee_id": employee.id})
    return employee


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee


def update_employee(db: Session, employee_id: int, data: EmployeeUpdate) -> Employee:
    """Apply only the fields present in the request body."""
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None and field not in NULLABLE_FIELDS:
            raise ValidationError(f"{field} cannot be null")
    employee = get_employee(db, employee_id)
    for field, value in changes.items():
        setattr(employee, field, value)
    _commit(db)
    db.refresh(employee)
    logger.info("Employee updated", extra={"employee_id": employee_id})
    return employee


def delete_employee(db: Session, employee_id: int) -> None:
    employee = get_employee(db, employee_id)
    db.delete(employee)
    db.commit()
    logger.info("Employee deleted", extra={"employee_id": employee_id})


def list_employees(db: Session, params: EmployeeQuery) -> tuple[int, list[Employee]]:
    """
    Return (total matching, page of employees).

    search is a case-insensitive substring match over name, e-mail, job title
    and department; % and _ in the term match literally. Unknown sort fields
    fall back to first_name ascending.
    """
    query = db.query(Employee)
    if params.search:
        pattern = f"%{escape_like(params.search)}%"
        query = query.filter(
            or_(*(col.ilike(pattern, escape=LIKE_ESCAPE) for col in SEARCH_COLUMNS))
        )

    total = query.count()

    if params.sort_field in SORTABLE_FIELDS:
        column = getattr(Employee, params.sort_field)
        direction = desc if params.sort_order == "desc" else asc
    else:
        column = getattr(Employee, DEFAULT_SORT_FIELD)
        direction = asc
    rows = (
        query.order_by(direction(column), Employee.id)
        .offset((params.page - 1) * params.limit)
        .limit(params.limit)
        .all()
    )
    return total, rows
