import enum

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hrdesk.database.base import Base


class BreakStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class BreakSession(Base):
    __tablename__ = "breaks"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    break_date = Column(Date, nullable=False, index=True)
    break_in_time = Column(DateTime(timezone=True), nullable=True)
    break_out_time = Column(DateTime(timezone=True), nullable=True)
    break_duration = Column(Integer, nullable=True)  # minutes
    is_active = Column(Boolean, default=True, nullable=False)

    edit_reason = Column(Text, nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    delete_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee", foreign_keys=[employee_id])

    @property
    def status(self) -> BreakStatus:
        return BreakStatus.ACTIVE if self.is_active else BreakStatus.COMPLETED
