import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_user
from models.students import Student as StudentModel
from models.teachers import Teacher as TeacherModel
from models.users import User as UserModel
from schemas.auth import LoginRequest, LoginResponse
from schemas.students import Student
from schemas.teachers import Teacher
from utils.security import issue_token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _details(db: Session, user: UserModel):
    user_type = user.user_type.lower()
    if user_type == "student":
        student = db.query(StudentModel).filter(StudentModel.user_id == user.id).first()
        return Student.model_validate(student).model_dump() if student else None
    if user_type == "teacher":
        teacher = db.query(TeacherModel).filter(TeacherModel.user_id == user.id).first()
        return Teacher.model_validate(teacher).model_dump() if teacher else None
    return None


# ✅ [LOGIN] plain username/password check, returns a signed token
@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(UserModel).filter(UserModel.username == request.username).first()
    if user is None or user.password != request.password or not user.flag:
        logger.info("Failed login for %s", request.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {
        "user_id": user.id,
        "username": user.username,
        "user_type": user.user_type,
        "token": issue_token(user.id, user.user_type),
        "details": _details(db, user),
    }


# ✅ [ME] who the bearer token belongs to
@router.get("/me")
def me(claims: dict = Depends(require_user), db: Session = Depends(get_db)):
    user = db.query(UserModel).filter(UserModel.id == claims["user_id"]).first()
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return {
        "success": True,
        "data": {"user_id": user.id, "username": user.username, "user_type": user.user_type,
                 "details": _details(db, user)},
    }
