from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.class_students import ClassStudent as ClassStudentModel
from models.class_subjects import ClassSubject as ClassSubjectModel
from models.grades import StudentGrade as StudentGradeModel
from schemas.grades import StudentGrade, StudentGradeUpsert
from services.exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/grades", tags=["grades"])


# ==========================================================
# [1] grade entry
# ==========================================================

# ✅ [UPSERT] insert or replace one quarter grade
# - the student must be enrolled in the class and the subject assigned to it
@router.put("/")
def upsert_grade(payload: StudentGradeUpsert, db: Session = Depends(get_db)):
    enrolled = db.query(ClassStudentModel).filter(
        ClassStudentModel.class_id == payload.class_id,
        ClassStudentModel.student_id == payload.student_id,
    ).first()
    if enrolled is None:
        raise ValidationError(f"Student {payload.student_id} is not enrolled in class {payload.class_id}")

    assignment = db.query(ClassSubjectModel).filter(
        ClassSubjectModel.class_id == payload.class_id,
        ClassSubjectModel.subject_id == payload.subject_id,
    ).first()
    if assignment is None:
        raise ValidationError(f"Subject {payload.subject_id} is not taught in class {payload.class_id}")

    grade = db.query(StudentGradeModel).filter(
        StudentGradeModel.student_id == payload.student_id,
        StudentGradeModel.class_id == payload.class_id,
        StudentGradeModel.subject_id == payload.subject_id,
        StudentGradeModel.quarter == payload.quarter,
    ).first()
    created = grade is None
    if created:
        grade = StudentGradeModel(
            student_id=payload.student_id,
            class_id=payload.class_id,
            subject_id=payload.subject_id,
            quarter=payload.quarter,
        )
        db.add(grade)
    grade.grade = payload.grade
    grade.teacher_id = payload.teacher_id if payload.teacher_id is not None else assignment.teacher_id

    db.commit()
    db.refresh(grade)
    return {
        "success": True,
        "data": StudentGrade.model_validate(grade),
        "message": "Grade created successfully" if created else "Grade updated successfully"
    }


# ✅ [READ] grade rows filtered by student / class / subject
@router.get("/")
def read_grades(
    student_id: Optional[int] = None,
    class_id: Optional[int] = None,
    subject_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    query = db.query(StudentGradeModel)
    if student_id is not None:
        query = query.filter(StudentGradeModel.student_id == student_id)
    if class_id is not None:
        query = query.filter(StudentGradeModel.class_id == class_id)
    if subject_id is not None:
        query = query.filter(StudentGradeModel.subject_id == subject_id)
    records = query.order_by(
        StudentGradeModel.student_id, StudentGradeModel.subject_id, StudentGradeModel.quarter
    ).all()
    return {"success": True, "data": [StudentGrade.model_validate(r) for r in records]}


# ==========================================================
# [2] dynamic routes
# ==========================================================

# ✅ [DELETE] one quarter grade
@router.delete("/{student_id}/{class_id}/{subject_id}/{quarter}")
def delete_grade(student_id: int, class_id: int, subject_id: int, quarter: int, db: Session = Depends(get_db)):
    grade = db.query(StudentGradeModel).filter(
        StudentGradeModel.student_id == student_id,
        StudentGradeModel.class_id == class_id,
        StudentGradeModel.subject_id == subject_id,
        StudentGradeModel.quarter == quarter,
    ).first()
    if grade is None:
        raise NotFoundError("Grade not found")
    db.delete(grade)
    db.commit()
    return {"success": True, "data": {"student_id": student_id, "class_id": class_id,
                                      "subject_id": subject_id, "quarter": quarter}}
