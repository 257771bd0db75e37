"""Pydantic request/response schemas."""

from hrdesk.schemas.auth import (
    ChangePasswordRequest,
    CurrentUser,
    LoginRequest,
    LoginUser,
    MessageResponse,
    RecoverPasswordRequest,
    RegisterRequest,
    TokenResponse,
    UserListItem,
    UserPublic,
    UsersListResponse,
    UserStatusUpdate,
)
from hrdesk.schemas.dashboard import DashboardMetrics
from hrdesk.schemas.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeOut,
    EmployeeQuery,
    EmployeeUpdate,
)
from hrdesk.schemas.health import HealthResponse

__all__ = [
    "ChangePasswordRequest",
    "CurrentUser",
    "DashboardMetrics",
    "EmployeeCreate",
    "EmployeeListResponse",
    "EmployeeOut",
    "EmployeeQuery",
    "EmployeeUpdate",
    "HealthResponse",
    "LoginRequest",
    "LoginUser",
    "MessageResponse",
    "RecoverPasswordRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserListItem",
    "UserPublic",
    "UserStatusUpdate",
    "UsersListResponse",
]
