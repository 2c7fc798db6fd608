import pytest


def test_signup(client):
    res = client.post("/students/", json={"name": "Liisa", "email": "liisa@example.org", "password": "pw123"})

    assert res.status_code == 201
    body = res.json()
    assert body["student_id"] > 0
    assert body["role"] == "user"
    assert "password" not in body
    assert "password_hash" not in body


def test_signup_with_taken_email(client, student):
    res = client.post("/students/", json={"name": "Copy", "email": student.email, "password": "pw123"})
    assert res.status_code == 409


@pytest.mark.parametrize("body", [
    {"email": "x@example.org", "password": "pw"},
    {"name": "X", "password": "pw"},
    {"name": "X", "email": "x@example.org"},
])
def test_signup_requires_all_fields(client, body):
    assert client.post("/students/", json=body).status_code == 400


def test_get_student(client, headers_for, student, other_student):
    res = client.get(f"/students/{student.student_id}", headers=headers_for(student.student_id))
    assert res.status_code == 200
    assert res.json()["email"] == student.email

    res = client.get(f"/students/{student.student_id}", headers=headers_for(other_student.student_id, "admin"))
    assert res.status_code == 403


def test_update_student(client, headers_for, student):
    res = client.put(
        f"/students/{student.student_id}",
        json={"name": "Katti M.", "email": "katti.m@example.org"},
        headers=headers_for(student.student_id),
    )
    assert res.status_code == 200
    assert res.json()["name"] == "Katti M."
    assert res.json()["email"] == "katti.m@example.org"


def test_update_student_email_conflict(client, headers_for, student, other_student):
    res = client.put(
        f"/students/{student.student_id}",
        json={"email": other_student.email},
        headers=headers_for(student.student_id),
    )
    assert res.status_code == 409


def test_update_student_needs_a_field(client, headers_for, student):
    res = client.put(f"/students/{student.student_id}", json={}, headers=headers_for(student.student_id))
    assert res.status_code == 400


def test_update_other_student_is_forbidden(client, headers_for, student_dao, student, other_student):
    res = client.put(
        f"/students/{other_student.student_id}",
        json={"name": "Renamed"},
        headers=headers_for(student.student_id),
    )
    assert res.status_code == 403
    assert student_dao.get_student_by_id(other_student.student_id).name == other_student.name


def test_delete_student(client, headers_for, student, other_student):
    headers = headers_for(student.student_id)

    assert client.delete(f"/students/{student.student_id}", headers=headers_for(other_student.student_id)).status_code == 403
    assert client.delete(f"/students/{student.student_id}", headers=headers).status_code == 200
    assert client.get(f"/students/{student.student_id}", headers=headers).status_code == 404


def test_student_routes_read_identity_from_headers(client, student):
    # the path parameter and the identity header share the name student_id
    res = client.get(
        f"/students/{student.student_id}",
        headers={"student_id": str(student.student_id), "role": "user"},
    )
    assert res.status_code == 200
    assert res.json()["student_id"] == student.student_id


@pytest.mark.parametrize("body,detail", [
    ({"name": "New", "email": ""}, "Email cannot be empty"),
    ({"name": "  ", "email": "new@example.org"}, "Name cannot be empty"),
])
def test_update_student_rejects_empty_values_before_writing(client, headers_for, student_dao, student, body, detail):
    res = client.put(f"/students/{student.student_id}", json=body, headers=headers_for(student.student_id))

    assert res.status_code == 400
    assert res.json()["detail"] == detail
    assert student_dao.get_student_by_id(student.student_id) == student


def test_out_of_range_ids_are_bad_requests(client, headers_for, student):
    huge = "99999999999999999999"

    res = client.get(f"/students/{huge}", headers=headers_for(student.student_id))
    assert res.status_code == 400
    assert res.json()["detail"] == "Bad Request: Invalid ID format"

    res = client.get(f"/students/{student.student_id}", headers={"student_id": huge, "role": "user"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Bad Request: Invalid Student ID format"
