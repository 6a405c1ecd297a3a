"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time; pin the values the tests rely on
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_ENV"] = "local"
os.environ["ATTENDANCE_TZ"] = "Asia/Kolkata"
os.environ["LATE_AFTER"] = "10:00"
os.environ["FULL_DAY_HOURS"] = "8"

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine

from hr_attendance.main import app
from hr_attendance.db.base import Base
from hr_attendance.core.deps import get_db, get_now
from hr_attendance.core.security import hash_password
from hr_attendance.models import User, Employee, Role  # noqa: F401  (registers all models)

IST = ZoneInfo("Asia/Kolkata")
TEST_DAY = date(2026, 10, 19)

# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def at(hour: int, minute: int = 0, second: int = 0, day: date = TEST_DAY) -> datetime:
    """Aware datetime in the attendance timezone."""
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=IST)


class FrozenClock:
    """Value returned by the get_now dependency during a test."""

    def __init__(self, now: datetime):
        self.now = now

    def set(self, hour: int, minute: int = 0, second: int = 0, day: date = TEST_DAY) -> datetime:
        self.now = at(hour, minute, second, day)
        return self.now


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def clock():
    return FrozenClock(at(9, 0))


@pytest.fixture(scope="function")
def client(db, clock):
    """Test client fixture with database and clock overrides"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: clock.now
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(
    db: Session,
    user_id: str,
    email: str,
    role: Role = Role.EMPLOYEE,
    password: str = "testpass123",
    status: str = "active",
    trash: int = 0,
    with_employee: bool = True,
) -> User:
    user = User(
        user_id=user_id,
        name=f"User {user_id}",
        email=email,
        password_hash=hash_password(password),
        role=role.value,
        status=status,
        trash=trash,
    )
    db.add(user)
    if with_employee:
        db.add(Employee(
            user_id=user_id,
            position="Engineer",
            designation="Staff",
            hire_date=date(2025, 1, 1),
            status=status,
        ))
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_employee(db: Session) -> User:
    return make_user(db, "EMPRav4821", "ravi@example.com")


@pytest.fixture
def test_admin(db: Session) -> User:
    return make_user(db, "ADM-001", "admin@example.com", role=Role.ADMIN, password="adminpass123")


def get_auth_token(client, email: str, password: str) -> str:
    r = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


@pytest.fixture
def admin_headers(client, test_admin):
    token = get_auth_token(client, "admin@example.com", "adminpass123")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers(client, test_employee):
    token = get_auth_token(client, "ravi@example.com", "testpass123")
    return {"Authorization": f"Bearer {token}"}
