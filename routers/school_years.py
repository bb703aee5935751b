from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from models.school_years import SchoolYear as SchoolYearModel
from schemas.school_years import SchoolYear, SchoolYearCreate
from services.exceptions import ConflictError, NotFoundError

router = APIRouter(prefix="/school-years", tags=["school years"])


def _get_or_404(db: Session, school_year_id: int) -> SchoolYearModel:
    school_year = db.query(SchoolYearModel).filter(SchoolYearModel.id == school_year_id).first()
    if school_year is None:
        raise NotFoundError(f"School year {school_year_id} not found")
    return school_year


# ✅ [CREATE] add a school year label
@router.post("/", status_code=201)
def create_school_year(payload: SchoolYearCreate, db: Session = Depends(get_db)):
    if db.query(SchoolYearModel).filter(SchoolYearModel.school_year == payload.school_year).first():
        raise ConflictError(f"School year {payload.school_year} already exists")
    if payload.is_active:
        db.query(SchoolYearModel).update({SchoolYearModel.is_active: False})
    school_year = SchoolYearModel(**payload.model_dump())
    db.add(school_year)
    db.commit()
    db.refresh(school_year)
    return {"success": True, "data": SchoolYear.model_validate(school_year)}


# ✅ [READ] every school year, newest label first
@router.get("/")
def read_school_years(db: Session = Depends(get_db)):
    records = db.query(SchoolYearModel).order_by(SchoolYearModel.school_year.desc()).all()
    return {"success": True, "data": [SchoolYear.model_validate(r) for r in records]}


# ✅ [READ] the active school year
@router.get("/active")
def read_active_school_year(db: Session = Depends(get_db)):
    school_year = db.query(SchoolYearModel).filter(SchoolYearModel.is_active.is_(True)).first()
    if school_year is None:
        raise NotFoundError("No active school year")
    return {"success": True, "data": SchoolYear.model_validate(school_year)}


# ✅ [READ] one school year
@router.get("/{school_year_id}")
def read_school_year(school_year_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": SchoolYear.model_validate(_get_or_404(db, school_year_id))}


# ✅ [UPDATE] make one school year the only active one
@router.put("/{school_year_id}/activate")
def activate_school_year(school_year_id: int, db: Session = Depends(get_db)):
    school_year = _get_or_404(db, school_year_id)
    db.query(SchoolYearModel).filter(SchoolYearModel.id != school_year_id).update(
        {SchoolYearModel.is_active: False}
    )
    school_year.is_active = True
    db.commit()
    db.refresh(school_year)
    return {"success": True, "data": SchoolYear.model_validate(school_year), "message": "School year activated"}
