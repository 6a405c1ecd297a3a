"""
Check-in service: check-in/check-out reconciliation and recent check-in stats.

Every check-in writes a CheckIn log row and (first check-in of the day) the
daily Attendance summary; every check-out closes the open CheckIn and mirrors
its check-out time and status onto the day's Attendance row. Both writes of an
event share one transaction.

All timestamps are stored in UTC. "Today" and time-of-day are evaluated in the
attendance timezone (settings.ATTENDANCE_TZ) from the caller-supplied `now`.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, date, time, timedelta
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hr_attendance.constants import CHECK_IN_DESCRIPTION
from hr_attendance.core.config import settings
from hr_attendance.core.errors import AlreadyCheckedIn, NoOpenCheckIn, NotFound, UserUnavailable
from hr_attendance.models.attendance import Attendance
from hr_attendance.models.check_in import CheckIn, CheckInStatus
from hr_attendance.models.user import User
from hr_attendance.services.audit_service import log_audit
from hr_attendance.utils.datetime_utils import (
    ensure_utc,
    format_seconds_of_day,
    get_work_date,
    now_local,
    seconds_of_day,
    to_local,
)

_log = logging.getLogger(__name__)


@dataclass
class RecentCheckIns:
    check_ins: List[CheckIn] = field(default_factory=list)
    average_check_in_time: Optional[str] = None
    average_check_out_time: Optional[str] = None
    last_check_out_time: Optional[datetime] = None


def derive_check_in_status(now: datetime, late_after: Optional[time] = None) -> CheckInStatus:
    """
    Late when the local HH:MM is after the cutoff, else Active.

    Comparison is at minute resolution: with a 10:00 cutoff, 10:00:59 is
    still Active and 10:01 is Late.
    """
    cutoff = late_after or settings.get_late_after()
    local = to_local(now)
    if time(local.hour, local.minute) > cutoff:
        return CheckInStatus.LATE
    return CheckInStatus.ACTIVE


def elapsed_whole_hours(start: datetime, end: datetime) -> int:
    """Floor of the hours between two instants (7h59m -> 7)."""
    delta = ensure_utc(end) - ensure_utc(start)
    return int(delta.total_seconds() // 3600)


def derive_check_out_status(
    check_in_time: datetime,
    check_out_time: datetime,
    full_day_hours: Optional[int] = None,
) -> CheckInStatus:
    """HalfDayPresent below the full-day threshold (whole hours), else Active."""
    threshold = full_day_hours if full_day_hours is not None else settings.FULL_DAY_HOURS
    if elapsed_whole_hours(check_in_time, check_out_time) < threshold:
        return CheckInStatus.HALF_DAY_PRESENT
    return CheckInStatus.ACTIVE


def get_usable_user(db: Session, user_id: str, *, lock: bool = False) -> User:
    """
    Return the user if active and not trashed, else raise UserUnavailable.

    With lock=True the user row is locked (SELECT ... FOR UPDATE) until the
    transaction ends, serializing check-in/check-out per user. SQLite ignores
    the lock; the partial unique index on check_ins still rejects duplicates.
    """
    query = db.query(User).filter(User.user_id == user_id)
    if lock:
        query = query.with_for_update()
    user = query.first()
    if user is None or not user.is_usable:
        _log.info("attendance rejected: user_id=%s unavailable", user_id)
        raise UserUnavailable()
    return user


def get_open_check_in(db: Session, user_id: str, work_date: date) -> Optional[CheckIn]:
    """Open (not checked out) check-in of the user for the given attendance date."""
    return (
        db.query(CheckIn)
        .filter(
            CheckIn.employee_id == user_id,
            CheckIn.check_in_date == work_date,
            CheckIn.check_out_time.is_(None),
        )
        .order_by(CheckIn.check_in_time.desc())
        .first()
    )


def get_day_attendance(db: Session, user_id: str, work_date: date) -> Optional[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.user_id == user_id, Attendance.attendance_date == work_date)
        .first()
    )


def check_in(
    db: Session,
    user_id: str,
    check_in_info: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Tuple[CheckIn, Attendance]:
    """
    Check a user in.

    Creates the CheckIn row and, for the first check-in of the day, the
    companion Attendance row, in one transaction. A later check-in on the same
    day (after a check-out) keeps the existing Attendance row.

    Raises:
        UserUnavailable: user missing, inactive or trashed (403)
        AlreadyCheckedIn: an open check-in exists for today (403)
    """
    now = now or now_local()
    work_date = get_work_date(now)
    now_utc_ts = ensure_utc(now)

    user = get_usable_user(db, user_id, lock=True)

    if get_open_check_in(db, user.user_id, work_date) is not None:
        db.rollback()
        _log.info("check-in rejected: user_id=%s already checked in on %s", user.user_id, work_date)
        raise AlreadyCheckedIn()

    check_in_status = derive_check_in_status(now)

    record = CheckIn(
        employee_id=user.user_id,
        check_in_date=work_date,
        check_in_time=now_utc_ts,
        check_in_info=check_in_info,
        check_out_time=None,
        check_out_info=None,
        status=check_in_status.value,
    )
    db.add(record)

    attendance = get_day_attendance(db, user.user_id, work_date)
    if attendance is None:
        attendance = Attendance(
            user_id=user.user_id,
            attendance_date=work_date,
            check_in_time=now_utc_ts,
            check_in_description=CHECK_IN_DESCRIPTION,
            status=check_in_status.value,
        )
        db.add(attendance)

    try:
        db.flush()
        log_audit(
            db=db,
            actor_id=None,
            action="CHECK_IN",
            entity_type="check_ins",
            entity_id=record.id,
            meta={
                "user_id": user.user_id,
                "attendance_date": work_date,
                "check_in_time": now_utc_ts,
                "status": check_in_status,
                "attendance_id": attendance.id,
            },
        )
        db.commit()
    except IntegrityError:
        # A concurrent request won the race for today's open check-in
        db.rollback()
        _log.warning("check-in conflict: user_id=%s date=%s", user.user_id, work_date)
        raise AlreadyCheckedIn()
    except Exception:
        db.rollback()
        raise

    db.refresh(record)
    db.refresh(attendance)
    _log.info(
        "check-in: user_id=%s check_in_id=%s date=%s status=%s",
        user.user_id, record.id, work_date, record.status,
    )
    return record, attendance


def check_out(
    db: Session,
    user_id: str,
    check_out_info: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Tuple[CheckIn, Optional[Attendance]]:
    """
    Check a user out.

    Closes today's open CheckIn and mirrors check-out time, description and
    status onto today's Attendance row when one exists. The returned
    Attendance is None when the day has no summary row.

    Raises:
        UserUnavailable: user missing, inactive or trashed (403)
        NoOpenCheckIn: no open check-in for today (404)
    """
    now = now or now_local()
    work_date = get_work_date(now)
    now_utc_ts = ensure_utc(now)

    user = get_usable_user(db, user_id, lock=True)

    record = get_open_check_in(db, user.user_id, work_date)
    if record is None:
        db.rollback()
        _log.info("check-out rejected: user_id=%s has no open check-in on %s", user.user_id, work_date)
        raise NoOpenCheckIn()

    check_out_status = derive_check_out_status(record.check_in_time, now_utc_ts)

    record.check_out_time = now_utc_ts
    record.check_out_info = check_out_info
    record.status = check_out_status.value

    attendance = get_day_attendance(db, user.user_id, work_date)
    if attendance is not None:
        attendance.check_out_time = now_utc_ts
        attendance.check_out_description = check_out_info
        attendance.status = check_out_status.value
    else:
        _log.warning("check-out: user_id=%s has no attendance row for %s", user.user_id, work_date)

    try:
        log_audit(
            db=db,
            actor_id=None,
            action="CHECK_OUT",
            entity_type="check_ins",
            entity_id=record.id,
            meta={
                "user_id": user.user_id,
                "attendance_date": work_date,
                "check_out_time": now_utc_ts,
                "status": check_out_status,
                "elapsed_hours": elapsed_whole_hours(record.check_in_time, now_utc_ts),
                "attendance_id": attendance.id if attendance is not None else None,
            },
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(record)
    if attendance is not None:
        db.refresh(attendance)
    _log.info(
        "check-out: user_id=%s check_in_id=%s date=%s status=%s",
        user.user_id, record.id, work_date, record.status,
    )
    return record, attendance


def recent_check_ins(
    db: Session,
    user_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RecentCheckIns:
    """
    Newest check-ins of the look-back window with average times of day.

    Averages are the mean local seconds-of-day, so a set spanning midnight
    (e.g. 23:00 and 01:00) averages to midday rather than to midnight.

    Raises:
        HTTPException 422: user_id given but unknown
        NotFound: no check-ins in the window (404)
    """
    now = now or now_local()
    days = settings.RECENT_CHECKINS_DAYS

    if user_id is not None:
        exists = db.query(User.id).filter(User.user_id == user_id).first()
        if exists is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="The selected user id is invalid.",
            )

    since = ensure_utc(now) - timedelta(days=days)
    query = db.query(CheckIn).filter(CheckIn.check_in_time >= since)
    if user_id is not None:
        query = query.filter(CheckIn.employee_id == user_id)
    rows = (
        query.order_by(CheckIn.check_in_time.desc(), CheckIn.id.desc())
        .limit(settings.RECENT_CHECKINS_LIMIT)
        .all()
    )

    if not rows:
        raise NotFound(f"No check-ins found for this user in the last {days} days")

    check_in_seconds = [seconds_of_day(r.check_in_time) for r in rows]
    check_outs = [r.check_out_time for r in rows if r.check_out_time is not None]
    check_out_seconds = [seconds_of_day(t) for t in check_outs]

    return RecentCheckIns(
        check_ins=rows,
        average_check_in_time=format_seconds_of_day(sum(check_in_seconds) // len(check_in_seconds)),
        average_check_out_time=(
            format_seconds_of_day(sum(check_out_seconds) // len(check_out_seconds))
            if check_out_seconds else None
        ),
        last_check_out_time=max((ensure_utc(t) for t in check_outs), default=None),
    )
