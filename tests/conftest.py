import os

# must be set before the app (and its settings/engine) are imported
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["ENV"] = "test"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import models
from database.db import Base, SessionLocal, engine
from main import app


class Factory:
    """Small helpers that insert and commit roster / grade rows."""

    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def school_year(self, label="2024-2025", is_active=False):
        return self._save(models.SchoolYear(school_year=label, is_active=is_active))

    def user(self, username, password="secret", user_type="student"):
        return self._save(models.User(username=username, password=password, user_type=user_type))

    def student(self, fname, lname="Cruz", user_id=None, gender="Female"):
        return self._save(models.Student(fname=fname, lname=lname, user_id=user_id, gender=gender, age=12))

    def teacher(self, fname="Maria", lname="Santos"):
        return self._save(models.Teacher(fname=fname, lname=lname, gender="Female", status="ACTIVE"))

    def subject(self, name):
        return self._save(models.Subject(name=name))

    def klass(self, grade_level, section, school_year="2024-2025"):
        return self._save(models.Class(grade_level=grade_level, section=section, school_year=school_year))

    def assign(self, cls, subject, teacher=None):
        return self._save(models.ClassSubject(
            class_id=cls.id, subject_id=subject.id, teacher_id=teacher.id if teacher else None,
        ))

    def enroll(self, cls, student):
        return self._save(models.ClassStudent(class_id=cls.id, student_id=student.id))

    def grade(self, student, cls, subject, quarter, value):
        return self._save(models.StudentGrade(
            student_id=student.id, class_id=cls.id, subject_id=subject.id,
            quarter=quarter, grade=Decimal(str(value)),
        ))

    def grades(self, student, cls, subject, values):
        """values[i] is the grade of quarter i+1; None skips the quarter."""
        for quarter, value in enumerate(values, start=1):
            if value is not None:
                self.grade(student, cls, subject, quarter, value)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def factory(db):
    return Factory(db)


@pytest.fixture()
def client(db):
    yield TestClient(app)
    app.dependency_overrides.clear()
