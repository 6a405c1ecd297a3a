"""
Tests for admin attendance override and delete
"""
from fastapi import status

from hr_attendance.models.attendance import Attendance
from hr_attendance.models.audit_log import AuditLog
from hr_attendance.models.check_in import CheckIn


def _checked_in_day(client, clock):
    clock.set(9, 0)
    response = client.post("/api/v1/check-in", json={"user_id": "EMPRav4821"})
    assert response.status_code == 200
    return response.json()["attendance"]["id"]


def test_set_attendance_status(client, db, clock, test_employee, admin_headers):
    attendance_id = _checked_in_day(client, clock)

    response = client.patch(
        f"/api/v1/attendance/{attendance_id}/action",
        json={"action": "absent"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Attendance record updated successfully"
    assert data["data"]["status"] == "absent"
    # The check-in log keeps its own status
    assert db.query(CheckIn).one().status == "Active"

    entry = db.query(AuditLog).filter(AuditLog.action == "ATTENDANCE_STATUS_SET").one()
    assert entry.actor_id == "ADM-001"
    assert entry.meta_json == {"old_status": "Active", "new_status": "absent"}


def test_set_attendance_status_shows_in_totals(client, clock, test_employee, admin_headers):
    attendance_id = _checked_in_day(client, clock)
    client.patch(f"/api/v1/attendance/{attendance_id}/action", json={"action": "fullday"}, headers=admin_headers)

    response = client.get("/api/v1/attendance", headers=admin_headers)

    assert response.json()["totals"]["fullday"] == 1


def test_set_attendance_status_invalid_action(client, clock, test_employee, admin_headers):
    attendance_id = _checked_in_day(client, clock)

    response = client.patch(
        f"/api/v1/attendance/{attendance_id}/action",
        json={"action": "holiday"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_set_attendance_status_unknown_id(client, db, admin_headers):
    response = client.patch("/api/v1/attendance/999/action", json={"action": "present"}, headers=admin_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Attendance record not found"


def test_set_attendance_status_requires_admin(client, clock, test_employee, employee_headers):
    attendance_id = _checked_in_day(client, clock)

    response = client.patch(
        f"/api/v1/attendance/{attendance_id}/action",
        json={"action": "present"},
        headers=employee_headers,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_attendance(client, db, clock, test_employee, admin_headers):
    attendance_id = _checked_in_day(client, clock)

    response = client.delete(f"/api/v1/attendance/{attendance_id}", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Attendance record deleted successfully"
    assert db.query(Attendance).count() == 0
    # The check-in log survives
    assert db.query(CheckIn).count() == 1

    again = client.delete(f"/api/v1/attendance/{attendance_id}", headers=admin_headers)
    assert again.status_code == status.HTTP_404_NOT_FOUND


def test_delete_attendance_unknown_id(client, db, admin_headers):
    response = client.delete("/api/v1/attendance/12345", headers=admin_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
