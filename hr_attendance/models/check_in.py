"""
Check-in log model: one row per check-in event, closed once by a check-out.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from hr_attendance.db.base import Base


class CheckInStatus(str, enum.Enum):
    ACTIVE = "Active"
    LATE = "Late"
    HALF_DAY_PRESENT = "HalfDayPresent"


class CheckIn(Base):
    __tablename__ = "check_ins"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String, ForeignKey("users.user_id"), nullable=False, index=True)
    check_in_date = Column(Date, nullable=False, index=True)  # Local date (ATTENDANCE_TZ) of check_in_time
    check_in_time = Column(DateTime(timezone=True), nullable=False)  # Server UTC timestamp
    check_in_info = Column(Text, nullable=True)
    check_out_time = Column(DateTime(timezone=True), nullable=True)
    check_out_info = Column(Text, nullable=True)
    status = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        # At most one open check-in per employee per day
        Index(
            "uq_check_ins_open_per_day",
            "employee_id",
            "check_in_date",
            unique=True,
            sqlite_where=check_out_time.is_(None),
            postgresql_where=check_out_time.is_(None),
        ),
    )

    user = relationship("User", backref="check_ins")
