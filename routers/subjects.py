from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.subjects import Subject as SubjectModel
from schemas.subjects import Subject, SubjectCreate
from services.exceptions import ConflictError, NotFoundError

router = APIRouter(prefix="/subjects", tags=["subjects"])


def _get_or_404(db: Session, subject_id: int) -> SubjectModel:
    subject = db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
    if subject is None:
        raise NotFoundError(f"Subject {subject_id} not found")
    return subject


# ✅ [CREATE] add a subject (names are unique)
@router.post("/", status_code=201)
def create_subject(subject: SubjectCreate, db: Session = Depends(get_db)):
    if db.query(SubjectModel).filter(SubjectModel.name == subject.name).first():
        raise ConflictError(f"Subject {subject.name} already exists")
    db_subject = SubjectModel(**subject.model_dump())
    db.add(db_subject)
    db.commit()
    db.refresh(db_subject)
    return {"success": True, "data": Subject.model_validate(db_subject), "message": "Subject created successfully"}


# ✅ [READ] every subject
@router.get("/")
def read_subjects(db: Session = Depends(get_db)):
    records = db.query(SubjectModel).order_by(SubjectModel.name).all()
    return {"success": True, "data": [Subject.model_validate(r) for r in records]}


# ✅ [READ] one subject
@router.get("/{subject_id}")
def read_subject(subject_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": Subject.model_validate(_get_or_404(db, subject_id))}


# ✅ [UPDATE] rename a subject
@router.put("/{subject_id}")
def update_subject(subject_id: int, updated: SubjectCreate, db: Session = Depends(get_db)):
    subject = _get_or_404(db, subject_id)
    subject.name = updated.name
    db.commit()
    db.refresh(subject)
    return {"success": True, "data": Subject.model_validate(subject), "message": "Subject updated successfully"}


# ✅ [DELETE] one subject
@router.delete("/{subject_id}")
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = _get_or_404(db, subject_id)
    db.delete(subject)
    db.commit()
    return {"success": True, "data": {"subject_id": subject_id}, "message": "Subject deleted successfully"}
