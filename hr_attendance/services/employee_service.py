"""
Employee service - business logic for the employee directory
"""
import logging
import random
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from hr_attendance.constants import ACCOUNT_ACTIVE, TRASH_NO, TRASH_YES
from hr_attendance.core.config import settings
from hr_attendance.core.errors import NotFound
from hr_attendance.core.security import hash_password
from hr_attendance.models.employee import Employee
from hr_attendance.models.user import User, Role
from hr_attendance.schemas.employee import EmployeeCreate
from hr_attendance.services.audit_service import log_audit
from hr_attendance.utils.datetime_utils import ensure_utc, get_work_date

_log = logging.getLogger(__name__)

INITIAL_ADMIN_USER_ID = "ADM-001"

SORTABLE_COLUMNS = {
    "employees.id": Employee.id,
    "users.name": User.name,
    "users.email": User.email,
    "employees.position": Employee.position,
    "employees.department": Employee.department,
    "employees.created_at": Employee.created_at,
    "employees.status": Employee.status,
}


def generate_user_id(name: str, rng: Optional[random.Random] = None) -> str:
    """
    Business user id: "EMP" + first three characters of the name + a random
    four-digit number. Uniqueness is not checked here; a clash fails on the
    users.user_id unique constraint.
    """
    rng = rng or random
    return f"EMP{name[:3]}{rng.randint(1000, 9999)}"


def create_employee(
    db: Session,
    employee_data: EmployeeCreate,
    actor_id: Optional[str],
    rng: Optional[random.Random] = None,
) -> Tuple[User, Employee]:
    """
    Create a user account and its employee profile in one transaction

    Args:
        db: Database session
        employee_data: Employee creation data
        actor_id: Business user id of the admin creating the employee
        rng: Random source for the generated user id (optional)

    Returns:
        (User, Employee)

    Raises:
        HTTPException: 400 if the email is already taken
    """
    existing = db.query(User.id).filter(User.email == employee_data.user_email).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The user email has already been taken."
        )

    user_id = generate_user_id(employee_data.user_name, rng)

    user = User(
        user_id=user_id,
        name=employee_data.user_name,
        email=employee_data.user_email,
        password_hash=hash_password(settings.DEFAULT_EMPLOYEE_PASSWORD),
        role=employee_data.account_type.value,
        status=ACCOUNT_ACTIVE,
        trash=TRASH_NO,
        mobile=employee_data.phone,
        country=employee_data.country,
        state=employee_data.state,
        address=employee_data.address,
    )
    employee = Employee(
        user_id=user_id,
        position=employee_data.position,
        designation=employee_data.designation,
        hire_date=get_work_date(),
        status=ACCOUNT_ACTIVE,
    )
    db.add(user)
    db.add(employee)

    try:
        db.flush()
        log_audit(
            db=db,
            actor_id=actor_id,
            action="EMPLOYEE_CREATE",
            entity_type="users",
            entity_id=user.user_id,
            meta={"email": user.email, "role": user.role, "position": employee.position},
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    db.refresh(employee)
    _log.info("employee created: user_id=%s by %s", user.user_id, actor_id)
    return user, employee


def list_employees(
    db: Session,
    status_filter: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sort_col: str = "employees.id",
    sort_order: str = "asc",
    limit: int = 10,
    page: int = 1,
) -> Tuple[List[Tuple[Employee, str, str]], int]:
    """
    Employees of non-trashed users, joined with user name and email

    Returns:
        ([(Employee, user_name, user_email), ...], total)
    """
    if sort_col not in SORTABLE_COLUMNS:
        raise ValueError(f"Unsupported sort column: {sort_col}")

    query = (
        db.query(Employee, User.name.label("user_name"), User.email.label("user_email"))
        .join(User, User.user_id == Employee.user_id)
        .filter(User.trash == TRASH_NO)
    )

    if status_filter:
        query = query.filter(Employee.status == status_filter)

    if start_date is not None and end_date is not None:
        # created_at is a timestamp; the end date counts as a whole day
        start_at = ensure_utc(datetime.combine(start_date, time.min, tzinfo=settings.get_timezone()))
        end_before = ensure_utc(datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=settings.get_timezone()))
        query = query.filter(Employee.created_at >= start_at, Employee.created_at < end_before)

    total = query.count()

    column = SORTABLE_COLUMNS[sort_col]
    ordering = column.desc() if sort_order == "desc" else column.asc()
    offset = (page - 1) * limit if page > 1 else 0
    rows = query.order_by(ordering, Employee.id.asc()).offset(offset).limit(limit).all()
    return [(row[0], row[1], row[2]) for row in rows], total


def trash_employee(db: Session, user_id: str, actor_id: str) -> User:
    """
    Soft-delete a user (trash = 1)

    Raises:
        NotFound: user missing or already trashed (404)
    """
    user = db.query(User).filter(User.user_id == user_id).first()
    if user is None or user.trash == TRASH_YES:
        raise NotFound("No employee found or status already set")

    user.trash = TRASH_YES
    log_audit(
        db=db,
        actor_id=actor_id,
        action="EMPLOYEE_TRASH",
        entity_type="users",
        entity_id=user.user_id,
        meta={"email": user.email},
    )
    db.commit()
    db.refresh(user)
    _log.info("user %s trashed by %s", user.user_id, actor_id)
    return user


def bootstrap_initial_admin(db: Session) -> Optional[User]:
    """
    Make sure a usable admin (active, not trashed) exists.

    When the initial admin account is still present but trashed or inactive it
    is reactivated with the configured password instead of being inserted again.

    Returns:
        The created or reactivated admin, or None when a usable admin exists
    """
    admin = (
        db.query(User)
        .filter(
            User.role == Role.ADMIN.value,
            User.status == ACCOUNT_ACTIVE,
            User.trash == TRASH_NO,
        )
        .first()
    )
    if admin is not None:
        return None

    email = settings.INITIAL_ADMIN_EMAIL.lower()
    admin = (
        db.query(User)
        .filter(or_(User.user_id == INITIAL_ADMIN_USER_ID, User.email == email))
        .order_by(User.id.asc())
        .first()
    )

    if admin is not None:
        admin.role = Role.ADMIN.value
        admin.status = ACCOUNT_ACTIVE
        admin.trash = TRASH_NO
        admin.password_hash = hash_password(settings.INITIAL_ADMIN_PASSWORD)
        if admin.employee is not None:
            admin.employee.status = ACCOUNT_ACTIVE
        action = "ADMIN_REACTIVATE"
    else:
        admin = User(
            user_id=INITIAL_ADMIN_USER_ID,
            name="System Administrator",
            email=email,
            password_hash=hash_password(settings.INITIAL_ADMIN_PASSWORD),
            role=Role.ADMIN.value,
            status=ACCOUNT_ACTIVE,
            trash=TRASH_NO,
        )
        db.add(admin)
        db.add(Employee(
            user_id=INITIAL_ADMIN_USER_ID,
            position="Administrator",
            designation="Administrator",
            hire_date=get_work_date(),
            status=ACCOUNT_ACTIVE,
        ))
        action = "ADMIN_BOOTSTRAP"

    try:
        db.flush()
        log_audit(
            db=db,
            actor_id=None,
            action=action,
            entity_type="users",
            entity_id=admin.user_id,
            meta={"email": admin.email},
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(admin)
    return admin
