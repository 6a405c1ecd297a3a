"""
Configuration management for the HR attendance backend
"""
from datetime import time
from typing import Optional, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    DATABASE_URL: str = Field(
        default="sqlite:///./hr_attendance.db",
        description="SQLAlchemy database URL (PostgreSQL in production)",
    )
    JWT_SECRET_KEY: str = Field(default="change-me-local-only", description="JWT secret key for token signing")

    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_EXPIRE_MINUTES: int = Field(default=120, description="JWT token expiration in minutes")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    # CORS settings
    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. Use '*' for local only."
    )

    # Attendance rules. "Today" and time-of-day are always evaluated in ATTENDANCE_TZ.
    ATTENDANCE_TZ: str = Field(default="Asia/Kolkata", description="Timezone that decides the attendance day")
    LATE_AFTER: str = Field(default="10:00", description="Check-ins after this local HH:MM are Late")
    FULL_DAY_HOURS: int = Field(default=8, ge=1, le=24, description="Whole hours needed for a full day")
    RECENT_CHECKINS_DAYS: int = Field(default=30, ge=1, description="Look-back window for recent check-ins")
    RECENT_CHECKINS_LIMIT: int = Field(default=20, ge=1, description="Maximum recent check-ins returned")

    # Employee directory
    DEFAULT_EMPLOYEE_PASSWORD: str = Field(
        default="defaultPassword",
        description="Placeholder password given to newly created employees",
    )

    # Version (can be git SHA or semver)
    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    # Initial admin bootstrap settings
    INITIAL_ADMIN_EMAIL: str = Field(
        default="admin@company.com",
        description="Email for initial admin user (used when no admin exists)"
    )
    INITIAL_ADMIN_PASSWORD: str = Field(
        default="Admin@12345",
        description="Password for initial admin user (used when no admin exists)"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @field_validator("ATTENDANCE_TZ")
    @classmethod
    def validate_tz(cls, v: str) -> str:
        """ATTENDANCE_TZ must be an IANA zone name known to zoneinfo"""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"Unknown timezone '{v}'")
        return v

    @field_validator("LATE_AFTER")
    @classmethod
    def validate_late_after(cls, v: str) -> str:
        """LATE_AFTER must be HH:MM"""
        try:
            time.fromisoformat(v)
        except ValueError:
            raise ValueError("LATE_AFTER must be in HH:MM format")
        if len(v) != 5:
            raise ValueError("LATE_AFTER must be in HH:MM format")
        return v

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            if len(self.JWT_SECRET_KEY) < 32:
                raise ValueError(
                    "JWT_SECRET_KEY must be at least 32 characters in production environment"
                )

            if self.ALLOWED_ORIGINS == "*" or not self.ALLOWED_ORIGINS:
                raise ValueError(
                    "ALLOWED_ORIGINS must be explicitly set (not '*') in production environment"
                )

    def get_allowed_origins_list(self) -> List[str]:
        """
        Get list of allowed CORS origins

        Returns:
            List of allowed origins (or ['*'] for local)
        """
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def get_timezone(self) -> ZoneInfo:
        return ZoneInfo(self.ATTENDANCE_TZ)

    def get_late_after(self) -> time:
        return time.fromisoformat(self.LATE_AFTER)


# Create settings instance
settings = Settings()

# Validate production settings if in prod
if settings.APP_ENV == "prod":
    settings.validate_production()
