from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from hrdesk.database.base import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)

    employee_code = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=True)

    password_hash = Column(String, nullable=True)

    role = Column(String, nullable=False, default="employee")  # admin | employee

    department = Column(String, nullable=True)
    designation = Column(String, nullable=True)

    # H.MM encoded: 8.20 = 8 hours 20 minutes per working day
    daily_hours = Column(Float, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
