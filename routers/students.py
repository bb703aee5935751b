from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.students import Student as StudentModel
from schemas.students import Student, StudentCreate
from services.exceptions import NotFoundError

router = APIRouter(prefix="/students", tags=["students"])


def _get_or_404(db: Session, student_id: int) -> StudentModel:
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise NotFoundError(f"Student {student_id} not found")
    return student


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] add a student
@router.post("/", status_code=201)
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return {
        "success": True,
        "data": Student.model_validate(db_student),
        "message": "Student created successfully"
    }


# ✅ [READ] every student
@router.get("/")
def read_students(db: Session = Depends(get_db)):
    records = db.query(StudentModel).order_by(StudentModel.lname, StudentModel.fname).all()
    return {"success": True, "data": [Student.model_validate(r) for r in records]}


# ✅ [SEARCH] by any name part
@router.get("/search")
def search_students(name: str = None, db: Session = Depends(get_db)):
    query = db.query(StudentModel)
    if name:
        pattern = f"%{name}%"
        query = query.filter(
            StudentModel.fname.ilike(pattern)
            | StudentModel.mname.ilike(pattern)
            | StudentModel.lname.ilike(pattern)
        )
    return {"success": True, "data": [Student.model_validate(r) for r in query.all()]}


# ==========================================================
# [2] dynamic routes
# ==========================================================

# ✅ [READ] one student
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": Student.model_validate(_get_or_404(db, student_id))}


# ✅ [UPDATE] one student
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentCreate, db: Session = Depends(get_db)):
    student = _get_or_404(db, student_id)
    for key, value in updated.model_dump().items():
        setattr(student, key, value)

    db.commit()
    db.refresh(student)
    return {
        "success": True,
        "data": Student.model_validate(student),
        "message": "Student updated successfully"
    }


# ✅ [DELETE] one student
@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = _get_or_404(db, student_id)
    db.delete(student)
    db.commit()
    return {
        "success": True,
        "data": {"student_id": student_id},
        "message": "Student deleted successfully"
    }
