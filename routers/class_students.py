from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.class_students import ClassStudent as ClassStudentModel
from models.students import Student as StudentModel
from schemas.classes import ClassStudentCreate
from services.enrollment import enroll_student
from services.exceptions import NotFoundError

router = APIRouter(prefix="/class-students", tags=["class students"])


# ✅ [CREATE] enroll a student (one class per school year, transactional)
@router.post("/", status_code=201)
def create_enrollment(payload: ClassStudentCreate, db: Session = Depends(get_db)):
    enroll_student(db, payload.class_id, payload.student_id)
    return {"success": True, "data": payload.model_dump(), "message": "Student enrolled successfully"}


# ✅ [READ] enrollments, optionally of one class
@router.get("/")
def read_enrollments(class_id: Optional[int] = None, db: Session = Depends(get_db)):
    query = db.query(ClassStudentModel, StudentModel).join(
        StudentModel, StudentModel.id == ClassStudentModel.student_id
    )
    if class_id is not None:
        query = query.filter(ClassStudentModel.class_id == class_id)
    rows = query.order_by(StudentModel.lname, StudentModel.fname).all()
    return {
        "success": True,
        "data": [
            {"class_id": cs.class_id, "student_id": s.id, "student_name": s.full_name, "gender": s.gender}
            for cs, s in rows
        ]
    }


# ✅ [DELETE] drop a student from a class
@router.delete("/{class_id}/{student_id}")
def delete_enrollment(class_id: int, student_id: int, db: Session = Depends(get_db)):
    enrollment = db.query(ClassStudentModel).filter(
        ClassStudentModel.class_id == class_id,
        ClassStudentModel.student_id == student_id,
    ).first()
    if enrollment is None:
        raise NotFoundError("Enrollment not found")
    db.delete(enrollment)
    db.commit()
    return {"success": True, "data": {"class_id": class_id, "student_id": student_id}}
