"""
Main API router
"""
from fastapi import APIRouter

from hr_attendance.api.v1 import (
    health,
    version,
    auth,
    check_ins,
    attendance,
    employees,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(check_ins.router, tags=["check-ins"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
