"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from hr_attendance.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String, nullable=True)  # users.user_id; None for kiosk check-in/out
    action = Column(String, nullable=False)  # e.g., "CHECK_IN", "ATTENDANCE_STATUS_SET", "EMPLOYEE_TRASH"
    entity_type = Column(String, nullable=False)  # e.g., "check_ins", "attendances", "users"
    entity_id = Column(String, nullable=True)
    meta_json = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
