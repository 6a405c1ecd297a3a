"""
Database models
"""
from hr_attendance.models.user import User, Role, AccountStatus
from hr_attendance.models.employee import Employee
from hr_attendance.models.check_in import CheckIn, CheckInStatus
from hr_attendance.models.attendance import Attendance, AttendanceAction
from hr_attendance.models.audit_log import AuditLog

__all__ = [
    "User",
    "Role",
    "AccountStatus",
    "Employee",
    "CheckIn",
    "CheckInStatus",
    "Attendance",
    "AttendanceAction",
    "AuditLog",
]
