"""SQLAlchemy model for the department table."""

from sqlalchemy import Column, Integer, String

from tasket.infrastructure.database import Base


class DepartmentModel(Base):
    """Organizational unit that groups employees and tasks."""

    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)


__all__ = ["DepartmentModel"]
