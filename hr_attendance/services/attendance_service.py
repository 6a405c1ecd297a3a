"""
Attendance service - listing, per-status totals and admin overrides
"""
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, Query

from hr_attendance.constants import ATTENDANCE_TOTAL_STATUSES, TRASH_NO
from hr_attendance.core.errors import NotFound
from hr_attendance.models.attendance import Attendance, AttendanceAction
from hr_attendance.models.employee import Employee
from hr_attendance.models.user import User
from hr_attendance.services.audit_service import log_audit

_log = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "id": Attendance.id,
    "user_id": Attendance.user_id,
    "attendance_date": Attendance.attendance_date,
    "check_in_time": Attendance.check_in_time,
    "check_out_time": Attendance.check_out_time,
    "status": Attendance.status,
    "created_at": Attendance.created_at,
    "updated_at": Attendance.updated_at,
}


def _visible_attendance(db: Session, *columns) -> Query:
    """Attendance rows of employees whose user is not trashed."""
    query = db.query(*columns) if columns else db.query(Attendance)
    return (
        query.join(Employee, Employee.user_id == Attendance.user_id)
        .join(User, User.user_id == Employee.user_id)
        .filter(User.trash == TRASH_NO)
    )


def _apply_date_range(query: Query, start_date: Optional[date], end_date: Optional[date]) -> Query:
    # Only a complete range filters; a lone bound is ignored
    if start_date is not None and end_date is not None:
        query = query.filter(
            Attendance.attendance_date >= start_date,
            Attendance.attendance_date <= end_date,
        )
    return query


def status_totals(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, int]:
    """
    Count visible attendance rows per admin status (absent, halfday, fullday,
    late, present) under the optional date range. Rows with any other status
    (e.g. engine-written "Active") are not counted here.
    """
    query = _apply_date_range(
        _visible_attendance(db, Attendance.status, func.count(Attendance.id)),
        start_date,
        end_date,
    ).filter(Attendance.status.in_(ATTENDANCE_TOTAL_STATUSES))
    counts = dict(query.group_by(Attendance.status).all())
    return {s: int(counts.get(s, 0)) for s in ATTENDANCE_TOTAL_STATUSES}


def list_attendance(
    db: Session,
    status_filter: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sort_col: str = "attendance_date",
    sort_order: str = "asc",
    limit: int = 10,
    page: int = 1,
) -> Tuple[List[Attendance], int, Dict[str, int]]:
    """
    Page of attendance rows plus total row count and per-status totals.

    Args:
        db: Database session
        status_filter: exact status to match (optional)
        start_date, end_date: inclusive attendance_date range, used only when both are set
        sort_col: one of SORTABLE_COLUMNS
        sort_order: "asc" or "desc"
        limit: page size (no upper bound)
        page: 1-based page number

    Returns:
        (rows, total rows matching the filters, status totals)
    """
    if sort_col not in SORTABLE_COLUMNS:
        raise ValueError(f"Unsupported sort column: {sort_col}")

    query = _apply_date_range(_visible_attendance(db), start_date, end_date)
    if status_filter:
        query = query.filter(Attendance.status == status_filter)

    total = query.count()

    column = SORTABLE_COLUMNS[sort_col]
    ordering = column.desc() if sort_order == "desc" else column.asc()
    tie_break = Attendance.id.desc() if sort_order == "desc" else Attendance.id.asc()
    offset = (page - 1) * limit if page > 1 else 0

    rows = query.order_by(ordering, tie_break).offset(offset).limit(limit).all()
    totals = status_totals(db, start_date, end_date)
    return rows, total, totals


def set_status(
    db: Session,
    attendance_id: int,
    action: AttendanceAction,
    actor_id: str,
) -> Attendance:
    """
    Overwrite the status of an attendance row. The paired check-in row is
    left untouched.

    Raises:
        NotFound: no attendance row with this id (404)
    """
    attendance = db.query(Attendance).filter(Attendance.id == attendance_id).first()
    if attendance is None:
        raise NotFound("Attendance record not found")

    old_status = attendance.status
    attendance.status = AttendanceAction(action).value
    log_audit(
        db=db,
        actor_id=actor_id,
        action="ATTENDANCE_STATUS_SET",
        entity_type="attendances",
        entity_id=attendance.id,
        meta={"old_status": old_status, "new_status": attendance.status},
    )
    db.commit()
    db.refresh(attendance)
    _log.info("attendance %s status %s -> %s by %s", attendance.id, old_status, attendance.status, actor_id)
    return attendance


def delete_attendance(db: Session, attendance_id: int, actor_id: str) -> None:
    """
    Hard-delete an attendance row. The paired check-in row is left untouched.

    Raises:
        NotFound: no attendance row with this id (404)
    """
    attendance = db.query(Attendance).filter(Attendance.id == attendance_id).first()
    if attendance is None:
        raise NotFound("Attendance record not found")

    log_audit(
        db=db,
        actor_id=actor_id,
        action="ATTENDANCE_DELETE",
        entity_type="attendances",
        entity_id=attendance.id,
        meta={
            "user_id": attendance.user_id,
            "attendance_date": attendance.attendance_date,
            "status": attendance.status,
        },
    )
    db.delete(attendance)
    db.commit()
    _log.info("attendance %s deleted by %s", attendance_id, actor_id)
