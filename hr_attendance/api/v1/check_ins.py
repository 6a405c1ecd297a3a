"""
Check-in / check-out endpoints (kiosk style: the body names the user).
The server clock decides "today" and the derived status; client time is never used.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hr_attendance.core.deps import get_db, get_now
from hr_attendance.schemas.attendance import AttendanceOut
from hr_attendance.schemas.check_in import (
    CheckInRequest,
    CheckOutRequest,
    CheckInOut,
    CheckInResponse,
    CheckOutResponse,
    RecentCheckInsResponse,
)
from hr_attendance.services import check_in_service as svc

router = APIRouter()


@router.post("/check-in", response_model=CheckInResponse)
async def check_in_endpoint(
    body: CheckInRequest,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Check the user in. Status is Late after the configured cutoff, else Active.
    403 when the user is unavailable or still has an open check-in today.
    """
    record, attendance = svc.check_in(db, body.user_id, body.check_in_info, now=now)
    return CheckInResponse(
        message="Check-in successful",
        check_in=CheckInOut.model_validate(record),
        attendance=AttendanceOut.model_validate(attendance),
    )


@router.post("/check-out", response_model=CheckOutResponse)
async def check_out_endpoint(
    body: CheckOutRequest,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Check the user out. Status is HalfDayPresent below the full-day hours, else Active.
    404 when there is no open check-in today; attendance is null when the day has no summary row.
    """
    record, attendance = svc.check_out(db, body.user_id, body.check_out_info, now=now)
    return CheckOutResponse(
        message="Check-out successful",
        check_out=CheckInOut.model_validate(record),
        attendance=AttendanceOut.model_validate(attendance) if attendance is not None else None,
    )


@router.get("/check-ins/recent", response_model=RecentCheckInsResponse)
async def recent_check_ins_endpoint(
    user_id: Optional[str] = Query(None, min_length=1, description="Limit to one user"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Newest check-ins of the look-back window with average check-in/check-out times of day."""
    recent = svc.recent_check_ins(db, user_id=user_id, now=now)
    return RecentCheckInsResponse(
        message="Check-ins and averages retrieved successfully",
        check_ins=[CheckInOut.model_validate(r) for r in recent.check_ins],
        average_check_in_time=recent.average_check_in_time,
        average_check_out_time=recent.average_check_out_time,
        last_check_out_time=recent.last_check_out_time,
    )
