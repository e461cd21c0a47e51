from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hrdesk.database.base import Base


class Penalty(Base):
    __tablename__ = "penalties"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    attendance_id = Column(Integer, ForeignKey("attendance_records.id"), nullable=True)

    penalty_type = Column(String(50), nullable=False)
    amount = Column(Float, nullable=True)
    description = Column(Text, nullable=False)
    penalty_date = Column(Date, nullable=False)
    issued_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    notes = Column(Text, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    viewed_by_employee = Column(Boolean, default=False, nullable=False)
    viewed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", foreign_keys=[employee_id])
