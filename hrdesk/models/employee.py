"""ORM model for employee records."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, func

from hrdesk.models.base import Base


class Employee(Base):
    """Employee record managed by admins and readable by every authenticated user."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False, index=True)
    last_name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    phone = Column(String(64), nullable=True)
    hire_date = Column(Date, nullable=False, index=True)
    job_title = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    salary = Column(Numeric(12, 2), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
