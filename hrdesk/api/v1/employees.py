"""Employee CRUD. Reads need any authenticated user; writes are admin only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from hrdesk.api.v1.auth import get_current_user, require_admin
from hrdesk.core.database import get_db
from hrdesk.schemas.auth import CurrentUser
from hrdesk.schemas.employee import (
    DEFAULT_SORT_FIELD,
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeOut,
    EmployeeQuery,
    EmployeeUpdate,
    SortOrder,
)
from hrdesk.services import employees as employee_service

router = APIRouter()


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_employee(
    body: EmployeeCreate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> EmployeeOut:
    return EmployeeOut.model_validate(employee_service.create_employee(db, body))


@router.get("", response_model=EmployeeListResponse)
def list_employees(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    search: Annotated[str, Query(max_length=255)] = "",
    sort_field: str = DEFAULT_SORT_FIELD,
    sort_order: SortOrder = "asc",
) -> EmployeeListResponse:
    """
    Page through employees.

    search matches first/last name, e-mail, job title and department
    (case-insensitive). Unknown sort_field values sort by first_name.
    """
    params = EmployeeQuery(
        page=page,
        limit=limit,
        search=search.strip(),
        sort_field=sort_field,
        sort_order=sort_order,
    )
    total, rows = employee_service.list_employees(db, params)
    return EmployeeListResponse(
        total=total,
        page=params.page,
        limit=params.limit,
        data=[EmployeeOut.model_validate(e) for e in rows],
    )


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> EmployeeOut:
    return EmployeeOut.model_validate(employee_service.get_employee(db, employee_id))


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> EmployeeOut:
    return EmployeeOut.model_validate(
        employee_service.update_employee(db, employee_id, body)
    )


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    employee_service.delete_employee(db, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
