from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.classes import Class as ClassModel
from models.class_subjects import ClassSubject as ClassSubjectModel
from models.subjects import Subject as SubjectModel
from models.teachers import Teacher as TeacherModel
from schemas.classes import ClassSubjectCreate
from services.exceptions import ConflictError, NotFoundError

router = APIRouter(prefix="/class-subjects", tags=["class subjects"])


# ✅ [CREATE] assign a subject (and its teacher) to a class
@router.post("/", status_code=201)
def assign_subject(payload: ClassSubjectCreate, db: Session = Depends(get_db)):
    if db.query(ClassModel).filter(ClassModel.id == payload.class_id).first() is None:
        raise NotFoundError(f"Class {payload.class_id} not found")
    if db.query(SubjectModel).filter(SubjectModel.id == payload.subject_id).first() is None:
        raise NotFoundError(f"Subject {payload.subject_id} not found")
    if payload.teacher_id is not None and \
            db.query(TeacherModel).filter(TeacherModel.id == payload.teacher_id).first() is None:
        raise NotFoundError(f"Teacher {payload.teacher_id} not found")

    exists = db.query(ClassSubjectModel).filter(
        ClassSubjectModel.class_id == payload.class_id,
        ClassSubjectModel.subject_id == payload.subject_id,
    ).first()
    if exists is not None:
        raise ConflictError("Subject is already assigned to this class")

    db.add(ClassSubjectModel(**payload.model_dump()))
    db.commit()
    return {"success": True, "data": payload.model_dump(), "message": "Subject assigned to class"}


# ✅ [READ] subject assignments, optionally of one class
@router.get("/")
def read_class_subjects(class_id: Optional[int] = None, db: Session = Depends(get_db)):
    query = (
        db.query(ClassSubjectModel, SubjectModel.name, TeacherModel.fname, TeacherModel.lname)
        .join(SubjectModel, SubjectModel.id == ClassSubjectModel.subject_id)
        .outerjoin(TeacherModel, TeacherModel.id == ClassSubjectModel.teacher_id)
    )
    if class_id is not None:
        query = query.filter(ClassSubjectModel.class_id == class_id)
    return {
        "success": True,
        "data": [
            {
                "class_id": cs.class_id,
                "subject_id": cs.subject_id,
                "subject_name": subject_name,
                "teacher_id": cs.teacher_id,
                "teacher_name": " ".join(p for p in (fname, lname) if p) or None,
            }
            for cs, subject_name, fname, lname in query.all()
        ]
    }


# ✅ [DELETE] remove a subject from a class
@router.delete("/{class_id}/{subject_id}")
def remove_subject(class_id: int, subject_id: int, db: Session = Depends(get_db)):
    assignment = db.query(ClassSubjectModel).filter(
        ClassSubjectModel.class_id == class_id,
        ClassSubjectModel.subject_id == subject_id,
    ).first()
    if assignment is None:
        raise NotFoundError("Subject is not assigned to this class")
    db.delete(assignment)
    db.commit()
    return {"success": True, "data": {"class_id": class_id, "subject_id": subject_id}}
