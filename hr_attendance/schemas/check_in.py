"""
Check-in / check-out schemas. All datetimes are emitted in the attendance timezone.
"""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from hr_attendance.schemas.attendance import AttendanceOut
from hr_attendance.utils.datetime_utils import iso_local


class CheckInRequest(BaseModel):
    """Body of POST /check-in"""
    user_id: str = Field(..., min_length=1, max_length=255, description="Business user id, e.g. EMPRav4821")
    check_in_info: Optional[str] = Field(None, description="Optional note stored on the check-in")


class CheckOutRequest(BaseModel):
    """Body of POST /check-out"""
    user_id: str = Field(..., min_length=1, max_length=255, description="Business user id")
    check_out_info: Optional[str] = Field(None, description="Optional note stored on the check-out")


class CheckInOut(BaseModel):
    """Check-in log entry"""
    id: int
    employee_id: str
    check_in_date: date
    check_in_time: datetime
    check_in_info: Optional[str] = None
    check_out_time: Optional[datetime] = None
    check_out_info: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("check_in_time", "check_out_time", "created_at", "updated_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class CheckInResponse(BaseModel):
    message: str
    check_in: CheckInOut
    attendance: AttendanceOut


class CheckOutResponse(BaseModel):
    message: str
    check_out: CheckInOut
    attendance: Optional[AttendanceOut] = None


class RecentCheckInsResponse(BaseModel):
    """Recent check-ins with average times of day (HH:MM:SS, attendance timezone)"""
    message: str
    check_ins: List[CheckInOut]
    average_check_in_time: Optional[str] = None
    average_check_out_time: Optional[str] = None
    last_check_out_time: Optional[datetime] = None

    @field_serializer("last_check_out_time", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)
