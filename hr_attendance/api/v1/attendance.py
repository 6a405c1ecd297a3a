"""
Attendance endpoints (admin): filtered listing with per-status totals, status override, delete.
Overrides and deletes act on the attendance summary only; check-in rows are not touched.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from hr_attendance.core.deps import get_db, require_admin
from hr_attendance.models.user import User
from hr_attendance.schemas.attendance import (
    AttendanceOut,
    AttendanceListResponse,
    AttendanceActionRequest,
    AttendanceActionResponse,
)
from hr_attendance.schemas.common import MessageResponse
from hr_attendance.services import attendance_service as svc

router = APIRouter()

_SORT_COLUMNS_PATTERN = "^(" + "|".join(svc.SORTABLE_COLUMNS) + ")$"


@router.get("", response_model=AttendanceListResponse)
async def list_attendance_endpoint(
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status to match"),
    start_date: Optional[date] = Query(None, alias="startDate", description="YYYY-MM-DD, used with endDate"),
    end_date: Optional[date] = Query(None, alias="endDate", description="YYYY-MM-DD, used with startDate"),
    sort_order: str = Query("asc", pattern="^(asc|desc)$"),
    col: str = Query("attendance_date", pattern=_SORT_COLUMNS_PATTERN),
    limit: int = Query(10, ge=1),
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    GET /api/v1/attendance?status=&startDate=&endDate=&sort_order=&col=&limit=&page=

    totals counts absent/halfday/fullday/late/present under the date range only.
    """
    if start_date is not None and end_date is not None and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate must be less than or equal to endDate",
        )
    rows, total, totals = svc.list_attendance(
        db,
        status_filter=status_filter,
        start_date=start_date,
        end_date=end_date,
        sort_col=col,
        sort_order=sort_order,
        limit=limit,
        page=page,
    )
    return AttendanceListResponse(
        data=[AttendanceOut.model_validate(r) for r in rows],
        total=total,
        totals=totals,
        current_page=page,
        per_page=limit,
    )


@router.patch("/{attendance_id}/action", response_model=AttendanceActionResponse)
async def attendance_action_endpoint(
    attendance_id: int,
    body: AttendanceActionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Overwrite the status of an attendance row (present, absent, late, fullday, halfday)."""
    attendance = svc.set_status(db, attendance_id, body.action, actor_id=current_user.user_id)
    return AttendanceActionResponse(data=AttendanceOut.model_validate(attendance))


@router.delete("/{attendance_id}", response_model=MessageResponse)
async def delete_attendance_endpoint(
    attendance_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Hard-delete an attendance row."""
    svc.delete_attendance(db, attendance_id, actor_id=current_user.user_id)
    return MessageResponse(message="Attendance record deleted successfully")
