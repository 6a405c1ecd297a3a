"""
Attendance summary schemas (listing and admin override)
"""
from datetime import date, datetime
from typing import Dict, Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from hr_attendance.models.attendance import AttendanceAction
from hr_attendance.utils.datetime_utils import iso_local


class AttendanceOut(BaseModel):
    """Attendance row. Datetimes in the attendance timezone."""
    id: int
    user_id: str
    attendance_date: date
    check_in_time: datetime
    check_in_description: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_description: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("check_in_time", "check_out_time", "created_at", "updated_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class AttendanceListResponse(BaseModel):
    """Page of attendance rows with per-status totals"""
    message: str = "Attendance records retrieved successfully"
    data: List[AttendanceOut]
    total: int
    totals: Dict[str, int]
    current_page: int
    per_page: int


class AttendanceActionRequest(BaseModel):
    """Body of PATCH /attendance/{id}/action"""
    action: AttendanceAction = Field(..., description="present, absent, late, fullday or halfday")


class AttendanceActionResponse(BaseModel):
    message: str = "Attendance record updated successfully"
    data: AttendanceOut
