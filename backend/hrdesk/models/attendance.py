import enum

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from hrdesk.database.base import Base


class AttendanceStatus(str, enum.Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    HALF_DAY = "HALF_DAY"
    LEAVE_APPROVED = "LEAVE_APPROVED"
    WFH_APPROVED = "WFH_APPROVED"


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    status = Column(Enum(AttendanceStatus), default=AttendanceStatus.PRESENT, nullable=False)

    # Same-day timestamps, UTC wall-clock
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    check_out_time = Column(DateTime(timezone=True), nullable=True)
    break_in_time = Column(DateTime(timezone=True), nullable=True)
    break_out_time = Column(DateTime(timezone=True), nullable=True)

    total_hours = Column(Float, default=0, nullable=False)
    overtime = Column(Float, default=0, nullable=False)
    shift = Column(String(20), nullable=True)

    import_source = Column(String(32), nullable=True)  # srp_upload | csv_upload | manual
    import_batch = Column(String(64), nullable=True)

    has_been_edited = Column(Boolean, default=False, nullable=False)
    edit_reason = Column(Text, nullable=True)
    edited_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employee = relationship("Employee")
    edit_history = relationship(
        "AttendanceEditHistory",
        back_populates="attendance",
        order_by="AttendanceEditHistory.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="unique_employee_date"),
    )
