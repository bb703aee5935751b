from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.teachers import Teacher as TeacherModel
from schemas.teachers import Teacher, TeacherCreate
from services.exceptions import NotFoundError

router = APIRouter(prefix="/teachers", tags=["teachers"])


def _get_or_404(db: Session, teacher_id: int) -> TeacherModel:
    teacher = db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
    if teacher is None:
        raise NotFoundError(f"Teacher {teacher_id} not found")
    return teacher


# ✅ [CREATE] add a teacher
@router.post("/", status_code=201)
def create_teacher(teacher: TeacherCreate, db: Session = Depends(get_db)):
    db_teacher = TeacherModel(**teacher.model_dump())
    db.add(db_teacher)
    db.commit()
    db.refresh(db_teacher)
    return {"success": True, "data": Teacher.model_validate(db_teacher), "message": "Teacher created successfully"}


# ✅ [READ] every teacher, optionally only ACTIVE / INACTIVE
@router.get("/")
def read_teachers(status: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(TeacherModel)
    if status:
        query = query.filter(TeacherModel.status == status.upper())
    return {"success": True, "data": [Teacher.model_validate(t) for t in query.all()]}


# ✅ [READ] one teacher
@router.get("/{teacher_id}")
def read_teacher(teacher_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": Teacher.model_validate(_get_or_404(db, teacher_id))}


# ✅ [UPDATE] one teacher
@router.put("/{teacher_id}")
def update_teacher(teacher_id: int, updated: TeacherCreate, db: Session = Depends(get_db)):
    teacher = _get_or_404(db, teacher_id)
    for key, value in updated.model_dump().items():
        setattr(teacher, key, value)
    db.commit()
    db.refresh(teacher)
    return {"success": True, "data": Teacher.model_validate(teacher), "message": "Teacher updated successfully"}


# ✅ [DELETE] one teacher
@router.delete("/{teacher_id}")
def delete_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = _get_or_404(db, teacher_id)
    db.delete(teacher)
    db.commit()
    return {"success": True, "data": {"teacher_id": teacher_id}, "message": "Teacher deleted successfully"}
