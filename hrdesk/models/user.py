"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Integer, String, func

from hrdesk.models.base import Base


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    STANDARD = "standard"


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BLOCKED = "blocked"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    status gates login; access_count is bumped on every successful login.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("access_count >= 0", name="ck_users_access_count_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", native_enum=False, length=32, values_callable=_enum_values),
        nullable=False,
        default=UserRole.STANDARD,
    )
    status = Column(
        Enum(UserStatus, name="user_status", native_enum=False, length=32, values_callable=_enum_values),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    access_count = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
