from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from hrdesk.database.base import Base


class AttendanceEditHistory(Base):
    """One row per changed field. Rows are appended, never updated."""

    __tablename__ = "attendance_edit_history"

    id = Column(Integer, primary_key=True, index=True)
    attendance_id = Column(Integer, ForeignKey("attendance_records.id"), nullable=False, index=True)
    edited_by = Column(Integer, ForeignKey("employees.id"), nullable=True)
    edited_by_name = Column(String, nullable=False)
    edited_by_role = Column(String(20), nullable=False)
    field_changed = Column(String(32), nullable=False)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
    change_reason = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    attendance = relationship("AttendanceRecord", back_populates="edit_history")
