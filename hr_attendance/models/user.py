"""
User model (identity and activation state)
"""
from sqlalchemy import Column, Integer, String, DateTime, SmallInteger
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from hr_attendance.db.base import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class AccountStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, unique=True, nullable=False, index=True)  # Business key, e.g. EMPRav4821
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=True)
    role = Column(String, nullable=False, default=Role.EMPLOYEE.value)
    status = Column(String, nullable=False, default=AccountStatus.ACTIVE.value)
    trash = Column(SmallInteger, nullable=False, default=0)  # 1 = soft-deleted
    mobile = Column(String, nullable=True)
    country = Column(String, nullable=True)
    state = Column(String, nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    employee = relationship("Employee", back_populates="user", uselist=False)

    @property
    def is_usable(self) -> bool:
        """Active and not trashed: allowed to check in/out and log in."""
        return self.status == AccountStatus.ACTIVE.value and self.trash == 0
