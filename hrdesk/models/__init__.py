"""SQLAlchemy ORM models."""

from hrdesk.models.base import Base
from hrdesk.models.employee import Employee
from hrdesk.models.user import User, UserRole, UserStatus

__all__ = ["Base", "Employee", "User", "UserRole", "UserStatus"]
