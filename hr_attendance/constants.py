"""
Constants for account state, statuses and service metadata
"""

SERVICE_NAME = "hr-attendance-backend"

# Default account status (users.status, employees.status)
ACCOUNT_ACTIVE = "active"

# Trash flag values (users.trash)
TRASH_NO = 0
TRASH_YES = 1

# Description stored on the attendance row created by a check-in
CHECK_IN_DESCRIPTION = "Entry Successful"

# Attendance statuses counted by the attendance listing, in response order
ATTENDANCE_TOTAL_STATUSES = ("absent", "halfday", "fullday", "late", "present")
