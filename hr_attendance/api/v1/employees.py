"""
Employee directory endpoints (admin only)
"""
import re
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from hr_attendance.core.deps import get_db, require_admin
from hr_attendance.models.user import User
from hr_attendance.schemas.common import MessageResponse
from hr_attendance.schemas.employee import (
    EmployeeCreate,
    EmployeeCreateData,
    EmployeeCreateResponse,
    EmployeeListItem,
    EmployeeListResponse,
    EmployeeProfileOut,
    UserProfileOut,
)
from hr_attendance.services import employee_service as svc

router = APIRouter()

_SORT_COLUMNS_PATTERN = "^(" + "|".join(re.escape(c) for c in svc.SORTABLE_COLUMNS) + ")$"


@router.post("", response_model=EmployeeCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """
    Create a user account and employee profile.

    The user id is generated ("EMP" + name prefix + 4 digits) and the account
    gets the configured default password.
    """
    user, employee = svc.create_employee(db, employee_data, actor_id=current_user.user_id)
    return EmployeeCreateResponse(
        data=EmployeeCreateData(
            user=UserProfileOut(
                id=user.id,
                user_id=user.user_id,
                name=user.name,
                email=user.email,
                phone=user.mobile,
                country=user.country,
                state=user.state,
                address=user.address,
                role=user.role,
            ),
            employee=EmployeeProfileOut.model_validate(employee),
        )
    )


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    limit: int = Query(10, ge=1, le=100),
    page: int = Query(1, ge=1),
    sort_order: str = Query("asc", pattern="^(asc|desc)$"),
    col: str = Query("employees.id", pattern=_SORT_COLUMNS_PATTERN),
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(active|inactive)$"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """List employees of non-trashed users with their name and email."""
    if start_date is not None and end_date is not None and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must be less than or equal to end_date",
        )
    rows, total = svc.list_employees(
        db,
        status_filter=status_filter,
        start_date=start_date,
        end_date=end_date,
        sort_col=col,
        sort_order=sort_order,
        limit=limit,
        page=page,
    )
    data = [
        EmployeeListItem(
            id=emp.id,
            user_id=emp.user_id,
            position=emp.position,
            designation=emp.designation,
            department=emp.department,
            hire_date=emp.hire_date,
            status=emp.status,
            created_at=emp.created_at,
            updated_at=emp.updated_at,
            user_name=user_name,
            user_email=user_email,
        )
        for emp, user_name, user_email in rows
    ]
    return EmployeeListResponse(data=data, total=total, current_page=page, per_page=limit)


@router.patch("/{user_id}/trash", response_model=MessageResponse)
async def trash_employee(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Soft-delete a user. Trashed users can no longer check in, check out or log in."""
    svc.trash_employee(db, user_id, actor_id=current_user.user_id)
    return MessageResponse(message="Trash status updated successfully")
