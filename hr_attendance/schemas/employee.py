"""
Employee directory schemas
"""
import re
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, field_serializer

from hr_attendance.models.user import Role
from hr_attendance.utils.datetime_utils import iso_local

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class EmployeeCreate(BaseModel):
    """Schema for creating an employee (user account + HR profile)"""
    user_name: str = Field(..., min_length=1, max_length=255, description="Employee name")
    user_email: str = Field(..., max_length=255, description="Login email (unique)")
    phone: str = Field(..., min_length=1, max_length=15, description="Mobile number")
    country: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    designation: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    account_type: Role = Field(..., description="admin or employee")

    @field_validator("user_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_name cannot be blank")
        return v

    @field_validator("user_email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and validate email"""
        v = v.strip().lower()
        if not _EMAIL_RE.match(v):
            raise ValueError("user_email must be a valid email address")
        return v


class UserProfileOut(BaseModel):
    id: int
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    role: str


class EmployeeProfileOut(BaseModel):
    user_id: str
    position: str
    designation: str
    department: Optional[str] = None
    hire_date: date
    status: str

    model_config = ConfigDict(from_attributes=True)


class EmployeeCreateData(BaseModel):
    user: UserProfileOut
    employee: EmployeeProfileOut


class EmployeeCreateResponse(BaseModel):
    message: str = "Employee created successfully"
    data: EmployeeCreateData


class EmployeeListItem(BaseModel):
    """Employee row joined with its user's name and email. Datetimes in the attendance timezone."""
    id: int
    user_id: str
    position: str
    designation: str
    department: Optional[str] = None
    hire_date: date
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user_name: str
    user_email: str

    @field_serializer("created_at", "updated_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class EmployeeListResponse(BaseModel):
    message: str = "Employees retrieved successfully"
    data: List[EmployeeListItem]
    total: int
    current_page: int
    per_page: int
