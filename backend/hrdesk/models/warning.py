import enum

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hrdesk.database.base import Base


class WarningSeverity(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class EmployeeWarning(Base):
    __tablename__ = "warnings"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    warning_type = Column(String(50), nullable=False)
    warning_message = Column(Text, nullable=False)
    severity = Column(Enum(WarningSeverity), default=WarningSeverity.LOW, nullable=False)
    warning_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    related_date = Column(Date, nullable=True)
    issued_by = Column(Integer, ForeignKey("employees.id"), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    viewed_by_employee = Column(Boolean, default=False, nullable=False)
    viewed_at = Column(DateTime(timezone=True), nullable=True)

    employee = relationship("Employee", foreign_keys=[employee_id])
