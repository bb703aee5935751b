from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.classes import Class as ClassModel
from models.school_years import SchoolYear as SchoolYearModel
from schemas.classes import Class, ClassCreate
from services.exceptions import NotFoundError

router = APIRouter(prefix="/classes", tags=["classes"])


def _get_or_404(db: Session, class_id: int) -> ClassModel:
    cls = db.query(ClassModel).filter(ClassModel.id == class_id).first()
    if cls is None:
        raise NotFoundError(f"Class {class_id} not found")
    return cls


def _check_school_year(db: Session, label: str):
    if db.query(SchoolYearModel).filter(SchoolYearModel.school_year == label).first() is None:
        raise NotFoundError(f"School year {label} not found")


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] add a class (grade level + section) to a school year
@router.post("/", status_code=201)
def create_class(new_class: ClassCreate, db: Session = Depends(get_db)):
    _check_school_year(db, new_class.school_year)
    db_class = ClassModel(**new_class.model_dump())
    db.add(db_class)
    db.commit()
    db.refresh(db_class)
    return {"success": True, "data": Class.model_validate(db_class), "message": "Class created successfully"}


# ✅ [READ] every class, optionally of one school year
@router.get("/")
def read_classes(school_year: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(ClassModel)
    if school_year:
        query = query.filter(ClassModel.school_year == school_year)
    records = query.order_by(ClassModel.school_year, ClassModel.grade_level, ClassModel.section).all()
    return {"success": True, "data": [Class.model_validate(r) for r in records]}


# ==========================================================
# [2] dynamic routes
# ==========================================================

# ✅ [READ] one class
@router.get("/{class_id}")
def read_class(class_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": Class.model_validate(_get_or_404(db, class_id))}


# ✅ [UPDATE] one class
@router.put("/{class_id}")
def update_class(class_id: int, updated: ClassCreate, db: Session = Depends(get_db)):
    cls = _get_or_404(db, class_id)
    _check_school_year(db, updated.school_year)
    for key, value in updated.model_dump().items():
        setattr(cls, key, value)

    db.commit()
    db.refresh(cls)
    return {"success": True, "data": Class.model_validate(cls), "message": "Class updated successfully"}


# ✅ [DELETE] one class
@router.delete("/{class_id}")
def delete_class(class_id: int, db: Session = Depends(get_db)):
    cls = _get_or_404(db, class_id)
    db.delete(cls)
    db.commit()
    return {"success": True, "data": {"class_id": class_id}, "message": "Class deleted successfully"}
