"""
Employee model (HR profile attached to a user)
"""
from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_attendance.db.base import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.user_id"), unique=True, nullable=False, index=True)
    position = Column(String, nullable=False)
    designation = Column(String, nullable=False)
    department = Column(String, nullable=True)
    hire_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="active")  # active / inactive
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    user = relationship("User", back_populates="employee")
