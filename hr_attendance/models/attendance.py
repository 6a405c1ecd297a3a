"""
Attendance model: daily summary derived from check-in/check-out events.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from hr_attendance.db.base import Base


class AttendanceAction(str, enum.Enum):
    """Statuses an administrator may set directly on an attendance row."""
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    FULLDAY = "fullday"
    HALFDAY = "halfday"


class Attendance(Base):
    __tablename__ = "attendances"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.user_id"), nullable=False, index=True)
    attendance_date = Column(Date, nullable=False, index=True)  # Local date (ATTENDANCE_TZ)
    check_in_time = Column(DateTime(timezone=True), nullable=False)
    check_in_description = Column(Text, nullable=True)
    check_out_time = Column(DateTime(timezone=True), nullable=True)
    check_out_description = Column(Text, nullable=True)
    status = Column(String, nullable=False)  # CheckInStatus value, or AttendanceAction value after admin override
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "attendance_date", name="uq_attendances_user_date"),
    )

    user = relationship("User", backref="attendances")
