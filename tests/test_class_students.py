import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

import models
from database.db import SessionLocal, get_db
from main import app
from services.enrollment import enroll_student


@pytest.fixture()
def roster(factory):
    factory.school_year("2024-2025")
    factory.school_year("2025-2026")
    return {
        "a": factory.klass("Grade 7", "A"),
        "b": factory.klass("Grade 7", "B"),
        "next": factory.klass("Grade 8", "A", school_year="2025-2026"),
        "student": factory.student("Lea"),
    }


def _enrollments(db, student_id):
    db.expire_all()
    return db.query(models.ClassStudent).filter(models.ClassStudent.student_id == student_id).all()


def test_enroll_student(client, db, roster):
    resp = client.post("/api/class-students/", json={"class_id": roster["a"].id, "student_id": roster["student"].id})
    assert resp.status_code == 201
    assert resp.json()["success"] is True
    assert [e.class_id for e in _enrollments(db, roster["student"].id)] == [roster["a"].id]


def test_second_class_in_same_school_year_is_rejected(client, db, roster):
    student_id = roster["student"].id
    client.post("/api/class-students/", json={"class_id": roster["b"].id, "student_id": student_id})

    resp = client.post("/api/class-students/", json={"class_id": roster["a"].id, "student_id": student_id})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "CONFLICT"
    assert "Grade 7 - B" in error["message"]
    assert "2024-2025" in error["message"]

    # rolled back: still only the first enrollment
    assert [e.class_id for e in _enrollments(db, student_id)] == [roster["b"].id]


def test_enrollment_in_another_school_year_is_allowed(client, db, roster):
    student_id = roster["student"].id
    assert client.post(
        "/api/class-students/", json={"class_id": roster["a"].id, "student_id": student_id},
    ).status_code == 201
    assert client.post(
        "/api/class-students/", json={"class_id": roster["next"].id, "student_id": student_id},
    ).status_code == 201
    assert len(_enrollments(db, student_id)) == 2


def test_enroll_unknown_class_or_student(client, roster):
    assert client.post(
        "/api/class-students/", json={"class_id": 999, "student_id": roster["student"].id},
    ).status_code == 404
    assert client.post(
        "/api/class-students/", json={"class_id": roster["a"].id, "student_id": 999},
    ).status_code == 404


def test_list_and_remove_enrollment(client, roster):
    class_id, student_id = roster["a"].id, roster["student"].id
    client.post("/api/class-students/", json={"class_id": class_id, "student_id": student_id})

    listed = client.get("/api/class-students/", params={"class_id": class_id}).json()["data"]
    assert listed == [{"class_id": class_id, "student_id": student_id, "student_name": "Lea Cruz", "gender": "Female"}]

    assert client.delete(f"/api/class-students/{class_id}/{student_id}").status_code == 200
    assert client.delete(f"/api/class-students/{class_id}/{student_id}").status_code == 404


def _failing_commit(session):
    def commit():
        session.flush()
        raise OperationalError("INSERT INTO class_students ...", {}, Exception("disk I/O error"))
    return commit


def test_enroll_rolls_back_when_commit_fails(db, roster, monkeypatch):
    student_id = roster["student"].id
    monkeypatch.setattr(db, "commit", _failing_commit(db))

    with pytest.raises(OperationalError):
        enroll_student(db, roster["a"].id, student_id)

    monkeypatch.undo()
    assert _enrollments(db, student_id) == []


def test_enroll_database_failure_is_generic_500_and_rolled_back(db, roster):
    def broken_db():
        session = SessionLocal()
        session.commit = _failing_commit(session)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_db
    try:
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.post(
            "/api/class-students/", json={"class_id": roster["a"].id, "student_id": roster["student"].id},
        )
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "disk" not in resp.text
    assert "INSERT" not in resp.text
    assert _enrollments(db, roster["student"].id) == []
