from datetime import date

import pytest


@pytest.fixture
def created(client, headers_for, student, course):
    res = client.post(
        "/schedules/",
        json={"course_id": course.course_id, "weekday": "monday", "start_time": "09:00", "end_time": "10:30"},
        headers=headers_for(student.student_id),
    )
    assert res.status_code == 201
    return res.json()


def test_create_schedule(created, course):
    assert created["schedule_id"] > 0
    assert created["course_id"] == course.course_id
    assert created["weekday"] == "MONDAY"
    assert created["start_time"] == "09:00"
    assert created["end_time"] == "10:30"


@pytest.mark.parametrize("overrides,detail", [
    ({"weekday": "funday"}, "Invalid weekday value"),
    ({"start_time": "9am"}, "Invalid time format. Use HH:MM"),
    ({"start_time": "11:00"}, "start_time must be before end_time"),
    ({"end_time": None}, "course_id, weekday, start_time, and end_time are required"),
    ({"course_id": None}, "course_id is required"),
])
def test_create_schedule_validation(client, headers_for, student, course, overrides, detail):
    body = {"course_id": course.course_id, "weekday": "TUESDAY", "start_time": "09:00", "end_time": "10:30"}
    body.update(overrides)

    res = client.post("/schedules/", json=body, headers=headers_for(student.student_id))
    assert res.status_code == 400
    assert res.json()["detail"] == detail


def test_create_schedule_for_foreign_or_unknown_course(client, headers_for, other_student, course):
    body = {"course_id": course.course_id, "weekday": "TUESDAY", "start_time": "09:00", "end_time": "10:30"}
    assert client.post("/schedules/", json=body, headers=headers_for(other_student.student_id)).status_code == 403

    body["course_id"] = 9999
    assert client.post("/schedules/", json=body, headers=headers_for(other_student.student_id)).status_code == 404


def test_list_schedules(client, headers_for, course_dao, student, other_student, course, created):
    headers = headers_for(student.student_id)

    res = client.get(f"/schedules/courses/{course.course_id}", headers=headers)
    assert res.status_code == 200
    assert [s["schedule_id"] for s in res.json()] == [created["schedule_id"]]

    res = client.get(f"/schedules/students/{student.student_id}", headers=headers)
    assert res.status_code == 200
    assert len(res.json()) == 1

    assert client.get(f"/schedules/courses/{course.course_id}", headers=headers_for(other_student.student_id)).status_code == 403
    assert client.get(f"/schedules/students/{student.student_id}", headers=headers_for(other_student.student_id)).status_code == 403

    empty = course_dao.add_course(student.student_id, "Empty", date(2025, 1, 1), date(2025, 2, 1))
    assert client.get(f"/schedules/courses/{empty.course_id}", headers=headers).status_code == 404


def test_get_schedule(client, headers_for, student, other_student, created):
    sid = created["schedule_id"]
    assert client.get(f"/schedules/{sid}", headers=headers_for(student.student_id)).json() == created
    assert client.get(f"/schedules/{sid}", headers=headers_for(other_student.student_id)).status_code == 403
    assert client.get("/schedules/9999", headers=headers_for(student.student_id)).status_code == 404


def test_update_schedule(client, headers_for, student, created):
    res = client.put(
        f"/schedules/{created['schedule_id']}",
        json={"weekday": "Thursday", "end_time": "11:45"},
        headers=headers_for(student.student_id),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["weekday"] == "THURSDAY"
    assert body["start_time"] == "09:00"
    assert body["end_time"] == "11:45"


def test_update_schedule_rejects_inverted_times(client, headers_for, student, created):
    res = client.put(
        f"/schedules/{created['schedule_id']}",
        json={"start_time": "12:00"},
        headers=headers_for(student.student_id),
    )
    assert res.status_code == 400


def test_delete_schedule(client, headers_for, student, other_student, created):
    sid = created["schedule_id"]
    assert client.delete(f"/schedules/{sid}", headers=headers_for(other_student.student_id)).status_code == 403
    assert client.delete(f"/schedules/{sid}", headers=headers_for(student.student_id)).status_code == 200
    assert client.get(f"/schedules/{sid}", headers=headers_for(student.student_id)).status_code == 404
