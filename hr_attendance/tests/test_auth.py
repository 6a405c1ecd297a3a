"""
Tests for authentication endpoints and guards
"""
from fastapi import status

from hr_attendance.core.security import create_access_token, decode_token, hash_password, verify_password
from hr_attendance.models.audit_log import AuditLog
from hr_attendance.models.user import Role
from hr_attendance.tests.conftest import make_user


def test_login_success(client, db, test_employee):
    response = client.post("/api/v1/auth/login", json={"email": "ravi@example.com", "password": "testpass123"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["token_type"] == "bearer"
    payload = decode_token(data["access_token"])
    assert payload["sub"] == "EMPRav4821"
    assert payload["role"] == "employee"
    assert db.query(AuditLog).filter(AuditLog.action == "AUTH_LOGIN_SUCCESS").count() == 1


def test_login_email_is_case_insensitive(client, test_employee):
    response = client.post("/api/v1/auth/login", json={"email": "RAVI@example.com", "password": "testpass123"})

    assert response.status_code == status.HTTP_200_OK


def test_login_wrong_password(client, test_employee):
    response = client.post("/api/v1/auth/login", json={"email": "ravi@example.com", "password": "wrong"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(client, db):
    response = client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": "x"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_login_trashed_user_forbidden(client, db):
    make_user(db, "EMPTra2222", "trashed@example.com", trash=1)

    response = client.post("/api/v1/auth/login", json={"email": "trashed@example.com", "password": "testpass123"})

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_login_inactive_user_forbidden(client, db):
    make_user(db, "EMPIna1111", "inactive@example.com", status="inactive")

    response = client.post("/api/v1/auth/login", json={"email": "inactive@example.com", "password": "testpass123"})

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_invalid_token_rejected(client, db):
    response = client.get("/api/v1/attendance", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_missing_user_rejected(client, db):
    token = create_access_token({"sub": "EMPGon9999", "role": "admin"})

    response = client.get("/api/v1/attendance", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_of_trashed_admin_rejected(client, db, test_admin, admin_headers):
    test_admin.trash = 1
    db.commit()

    response = client.get("/api/v1/attendance", headers=admin_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_expired_token_rejected(client, db, test_admin):
    token = create_access_token({"sub": test_admin.user_id}, expires_minutes=-1)

    response = client.get("/api/v1/attendance", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_role_grants_access(client, db):
    make_user(db, "EMPBos5555", "boss@example.com", role=Role.ADMIN, password="bosspass123")
    login = client.post("/api/v1/auth/login", json={"email": "boss@example.com", "password": "bosspass123"})

    response = client.get("/api/v1/attendance", headers={"Authorization": f"Bearer {login.json()['access_token']}"})

    assert response.status_code == status.HTTP_200_OK


def test_password_hashing():
    hashed = hash_password("s3cret")

    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")
    assert not verify_password("s3cret", None)
