"""SQLAlchemy model for the employee table."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from tasket.infrastructure.database import Base


class EmployeeModel(Base):
    """Database representation of an employee account."""

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    role = Column(String(30), nullable=False, default="employee")
    department_id = Column(
        Integer, ForeignKey("departments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_active = Column(Boolean, nullable=False, default=True)

    department = relationship("DepartmentModel", lazy="joined")


__all__ = ["EmployeeModel"]
