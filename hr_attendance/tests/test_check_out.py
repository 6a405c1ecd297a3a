"""
Tests for POST /check-out
"""
from fastapi import status

from hr_attendance.models.attendance import Attendance
from hr_attendance.models.check_in import CheckIn
from hr_attendance.tests.conftest import TEST_DAY, make_user


def _check_in(client, clock, hour, minute=0, user_id="EMPRav4821"):
    clock.set(hour, minute)
    response = client.post("/api/v1/check-in", json={"user_id": user_id})
    assert response.status_code == 200, response.text
    return response.json()


def test_check_out_without_check_in_not_found(client, test_employee):
    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "No active check-in found for today"


def test_check_out_under_full_day_is_half_day(client, db, clock, test_employee):
    _check_in(client, clock, 9, 0)
    clock.set(16, 59)

    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821", "check_out_info": "leaving early"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Check-out successful"
    assert data["check_out"]["status"] == "HalfDayPresent"
    assert data["check_out"]["check_out_time"] == "2026-10-19T16:59:00+05:30"
    assert data["check_out"]["check_out_info"] == "leaving early"
    assert data["attendance"]["status"] == "HalfDayPresent"
    assert data["attendance"]["check_out_description"] == "leaving early"
    assert data["attendance"]["check_out_time"] == "2026-10-19T16:59:00+05:30"


def test_check_out_at_full_day_is_active(client, clock, test_employee):
    _check_in(client, clock, 9, 0)
    clock.set(17, 0)

    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["check_out"]["status"] == "Active"
    assert data["attendance"]["status"] == "Active"


def test_late_check_in_full_day_check_out_becomes_active(client, clock, test_employee):
    _check_in(client, clock, 10, 30)
    clock.set(19, 0)

    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    assert response.json()["attendance"]["status"] == "Active"


def test_second_check_out_not_found(client, clock, test_employee):
    _check_in(client, clock, 9, 0)
    clock.set(18, 0)
    assert client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"}).status_code == 200

    clock.set(18, 5)
    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_check_out_ignores_open_check_in_from_previous_day(client, db, clock, test_employee):
    _check_in(client, clock, 9, 0)

    clock.now = clock.now.replace(day=20, hour=9)
    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert db.query(CheckIn).filter(CheckIn.check_out_time.is_(None)).count() == 1


def test_check_out_without_attendance_row_returns_null_attendance(client, db, clock, test_employee):
    _check_in(client, clock, 9, 0)
    db.query(Attendance).delete()
    db.commit()

    clock.set(18, 0)
    response = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["check_out"]["status"] == "Active"
    assert data["attendance"] is None
    assert db.query(Attendance).count() == 0


def test_check_out_trashed_user_forbidden(client, db, clock):
    user = make_user(db, "EMPSam3333", "sam@example.com")
    _check_in(client, clock, 9, 0, user_id="EMPSam3333")
    user.trash = 1
    db.commit()

    clock.set(18, 0)
    response = client.post("/api/v1/check-out", json={"user_id": "EMPSam3333"})

    assert response.status_code == status.HTTP_403_FORBIDDEN
    record = db.query(CheckIn).filter(CheckIn.employee_id == "EMPSam3333").one()
    assert record.check_out_time is None


def test_check_out_closes_only_todays_check_in(client, db, clock, test_employee):
    _check_in(client, clock, 9, 0)
    clock.set(18, 0)
    client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"})

    record = db.query(CheckIn).one()
    db.refresh(record)
    assert record.check_in_date == TEST_DAY
    assert record.check_out_time is not None
    assert record.status == "Active"


def test_full_day_scenario_keeps_both_rows_in_step(client, db, clock, test_employee):
    first = _check_in(client, clock, 9, 30)
    assert first["check_in"]["status"] == "Active"

    clock.set(18, 0)
    data = client.post("/api/v1/check-out", json={"user_id": "EMPRav4821"}).json()

    assert data["check_out"]["status"] == data["attendance"]["status"] == "Active"
    assert data["check_out"]["check_out_time"] == data["attendance"]["check_out_time"] == "2026-10-19T18:00:00+05:30"
