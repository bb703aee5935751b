"""
services/enrollment.py

Student -> class enrollment, the only write path with a transaction boundary.

A student may belong to at most one class per school year. The check and the
insert run on the request's single session/connection; the student row is
locked first so two concurrent enrollments of the same student serialize.
Any failure rolls the transaction back before the error propagates.
"""

import logging

from sqlalchemy.orm import Session

from models.classes import Class as ClassModel
from models.class_students import ClassStudent as ClassStudentModel
from models.students import Student as StudentModel
from services.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def enroll_student(db: Session, class_id: int, student_id: int) -> ClassStudentModel:
    try:
        cls = db.query(ClassModel).filter(ClassModel.id == class_id).first()
        if cls is None:
            raise NotFoundError(f"Class {class_id} not found")

        student = (
            db.query(StudentModel)
            .filter(StudentModel.id == student_id)
            .with_for_update()
            .first()
        )
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")

        existing = (
            db.query(ClassModel)
            .join(ClassStudentModel, ClassStudentModel.class_id == ClassModel.id)
            .filter(
                ClassStudentModel.student_id == student_id,
                ClassModel.school_year == cls.school_year,
            )
            .first()
        )
        if existing is not None:
            raise ConflictError(
                f"Student is already enrolled in {existing.display_name} "
                f"(class {existing.id}) for school year {cls.school_year}"
            )

        enrollment = ClassStudentModel(class_id=class_id, student_id=student_id)
        db.add(enrollment)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Enrolled student %s in class %s (%s)", student_id, class_id, cls.school_year)
    return enrollment
