# /tests/test_api.py

"""
Endpoint tests through FastAPI's TestClient: authentication wiring, the
error envelope, CRUD status codes, uploads and the semester report.
"""

import pytest

from examcell.services import auth_service

# --- Health & authentication ---

def test_health_check_is_public(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"

def test_login_returns_token_and_profile(client, seed_admin):
    response = client.post("/api/auth/login", json={"email": "admin@example.edu", "password": "admin-pass", "role": "admin"})

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "admin"
    assert body["email"] == "admin@example.edu"
    assert body["token"]
    assert "password" not in body

def test_seeded_bootstrap_admin_can_log_in(client, db, mocker):
    mocker.patch.object(auth_service.config, "BOOTSTRAP_ADMIN_EMAIL", "Admin@ExamCell.Example.edu")
    mocker.patch.object(auth_service.config, "BOOTSTRAP_ADMIN_PASSWORD", "change-me")
    auth_service.seed_bootstrap_admin(db)

    response = client.post("/api/auth/login", json={"email": "Admin@ExamCell.Example.edu", "password": "change-me", "role": "admin"})

    assert response.status_code == 200
    assert response.json()["email"] == "Admin@examcell.example.edu"

def test_login_with_wrong_role_is_401(client, seed_students):
    response = client.post("/api/auth/login", json={"email": "asha@example.edu", "password": "student-pass", "role": "admin"})

    assert response.status_code == 401
    assert response.json() == {
        "status": 401,
        "error": "Unauthorized",
        "message": "Invalid credentials.",
        "path": "/api/auth/login",
    }

def test_login_with_malformed_body_is_400(client):
    response = client.post("/api/auth/login", json={"email": "not-an-email", "password": ""})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation Failed"
    assert set(body["errors"]) >= {"email", "password", "role"}

def test_protected_route_without_token_is_401(client):
    response = client.get("/api/students")
    assert response.status_code == 401
    assert response.json()["path"] == "/api/students"
    assert response.json()["message"] == "Authentication required. Please log in or provide a valid token."

def test_protected_route_with_garbage_token_is_401(client):
    response = client.get("/api/students", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401

def test_me_returns_current_principal(client, student_headers):
    response = client.get("/api/auth/me", headers=student_headers)
    assert response.status_code == 200
    assert response.json() == {"id": "S1", "email": "asha@example.edu", "name": "Asha Rao", "role": "student"}

# --- Students ---

def test_student_crud_flow(client, admin_headers):
    new_student = {
        "id": "S10", "name": "Chen Li", "email": "chen@example.edu",
        "department": "Physics", "year": 1, "password": "pw-123",
    }
    created = client.post("/api/students", json=new_student, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["gpa"] == 0.0
    assert created.json()["status"] == "Active"
    assert "password" not in created.json()

    duplicate = client.post("/api/students", json=new_student, headers=admin_headers)
    assert duplicate.status_code == 400

    updated = client.put("/api/students/S10", json={"year": 2}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["year"] == 2
    assert updated.json()["name"] == "Chen Li"

    assert client.delete("/api/students/S10", headers=admin_headers).status_code == 204
    missing = client.get("/api/students/S10", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "Not Found"

def test_student_created_with_password_can_log_in(client, admin_headers):
    client.post("/api/students", json={
        "id": "S11", "name": "Dana Cruz", "email": "dana@example.edu",
        "department": "CS", "year": 1, "password": "dana-pass",
    }, headers=admin_headers)

    response = client.post("/api/auth/login", json={"email": "dana@example.edu", "password": "dana-pass", "role": "student"})
    assert response.status_code == 200
    assert response.json()["id"] == "S11"

def test_update_student_to_taken_email_is_400(client, admin_headers, seed_students):
    response = client.put("/api/students/S2", json={"email": "asha@example.edu"}, headers=admin_headers)
    assert response.status_code == 400

# --- Subjects & results ---

def test_subject_crud_flow(client, admin_headers):
    created = client.post("/api/subjects", json={"code": "PH101", "name": "Physics I", "department": "Physics", "credits": 3}, headers=admin_headers)
    assert created.status_code == 201

    assert client.post("/api/subjects", json={"code": "PH101", "name": "Dup", "department": "Physics", "credits": 3}, headers=admin_headers).status_code == 400
    assert client.put("/api/subjects/PH101", json={"credits": 4}, headers=admin_headers).json()["credits"] == 4
    assert client.delete("/api/subjects/PH101", headers=admin_headers).status_code == 204
    assert client.get("/api/subjects/PH101", headers=admin_headers).status_code == 404

def test_result_create_derives_status_and_updates_gpa(client, admin_headers, seed_students, seed_subjects):
    payload = {
        "studentId": "S1", "semester": "Fall 2024", "subjectCode": "CS101",
        "subjectName": "Intro to Programming", "marks": 35, "grade": "F",
    }
    created = client.post("/api/results", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["status"] == "Fail"

    result_id = created.json()["id"]
    updated = client.put(f"/api/results/{result_id}", json={"marks": 88, "grade": "A"}, headers=admin_headers)
    assert updated.json()["status"] == "Pass"
    assert client.get("/api/students/S1", headers=admin_headers).json()["gpa"] == 4.0

    assert client.delete(f"/api/results/{result_id}", headers=admin_headers).status_code == 204
    assert client.get("/api/students/S1", headers=admin_headers).json()["gpa"] == 0.0

def test_result_for_unknown_student_is_404(client, admin_headers, seed_subjects):
    payload = {
        "studentId": "ghost", "semester": "Fall 2024", "subjectCode": "CS101",
        "subjectName": "Intro to Programming", "marks": 70, "grade": "B",
    }
    assert client.post("/api/results", json=payload, headers=admin_headers).status_code == 404

def test_result_marks_out_of_range_is_400(client, admin_headers, seed_students, seed_subjects):
    payload = {
        "studentId": "S1", "semester": "Fall 2024", "subjectCode": "CS101",
        "subjectName": "Intro to Programming", "marks": 140, "grade": "A",
    }
    response = client.post("/api/results", json=payload, headers=admin_headers)
    assert response.status_code == 400
    assert "marks" in response.json()["errors"]

# --- Uploads ---

def _upload(client, headers, content, filename="results.csv", content_type="text/csv"):
    return client.post(
        "/api/uploads/results/csv",
        files={"file": (filename, content, content_type)},
        data={"semester": "Fall 2024", "type": "semester-results"},
        headers=headers,
    )

def test_upload_csv_endpoint(client, admin_headers, seed_students, seed_subjects):
    content = b"student_id,subject_code,marks,grade,status\nS1,CS101,85,A,Pass\nS2,CS102,72,B,Pass\n"

    response = _upload(client, admin_headers, content)

    assert response.status_code == 200
    assert response.json() == {"success": True, "recordsProcessed": 2, "message": "CSV processed successfully."}

    uploads = client.get("/api/uploads", headers=admin_headers).json()
    assert uploads[0]["status"] == "Completed"
    assert uploads[0]["records"] == 2
    assert uploads[0]["name"] == "results.csv"
    assert "createdAt" in uploads[0]

def test_upload_with_bad_mark_is_400_and_recorded_as_failed(client, admin_headers, seed_students, seed_subjects):
    content = b"student_id,subject_code,marks,grade,status\nS1,CS101,85,A,Pass\nS2,CS102,abc,B,Pass\n"

    response = _upload(client, admin_headers, content)

    assert response.status_code == 400
    assert response.json()["message"] == "CSV contains invalid numeric data for marks at row 2."
    assert client.get("/api/results", headers=admin_headers).json() == []
    assert client.get("/api/uploads", headers=admin_headers).json()[0]["status"] == "Failed"

def test_upload_of_non_csv_is_400(client, admin_headers):
    response = _upload(client, admin_headers, b"%PDF-1.4", filename="results.pdf", content_type="application/pdf")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid file type. Please upload a CSV file."

def test_upload_requires_authentication(client):
    response = _upload(client, {}, b"student_id,subject_code,marks,grade,status\n")
    assert response.status_code == 401

@pytest.mark.parametrize("query, expected", [("", 5), ("?limit=2", 2), ("?limit=0", 5)])
def test_recent_uploads_limit(client, admin_headers, ledger, query, expected):
    for i in range(6):
        ledger.open_entry(f"file{i}.csv", "semester-results")
    response = client.get(f"/api/uploads{query}", headers=admin_headers)
    assert len(response.json()) == expected

# --- Reports ---

def test_semester_report_renders_escaped_html(client, admin_headers, seed_students, seed_subjects, db):
    db.add_results_batch([
        {"student_id": "S1", "semester": "Fall 2024", "subject_code": "CS101", "subject_name": "Intro <Programming>",
         "marks": 85.0, "grade": "A", "status": "Pass"},
        {"student_id": "S404", "semester": "Fall 2024", "subject_code": "CS102", "subject_name": "Data Structures",
         "marks": 60.0, "grade": "C", "status": "Pass"},
    ])
    db.commit()

    response = client.get("/api/reports/semester/Fall 2024", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "<title>Semester Results - Fall 2024</title>" in html
    assert "Asha Rao" in html
    assert "Unknown" in html
    assert "Intro &lt;Programming&gt;" in html
    assert "window.print()" in html

def test_semester_report_without_results(client, admin_headers):
    response = client.get("/api/reports/semester/Spring 2030", headers=admin_headers)
    assert response.status_code == 200
    assert "No Results Found" in response.text
    assert "Spring 2030" in response.text

def test_semester_report_is_admin_only(client, student_headers):
    response = client.get("/api/reports/semester/Fall 2024", headers=student_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"
