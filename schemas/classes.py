from pydantic import BaseModel
from typing import Optional


# ✅ create / update request body
# → id is generated by the DB
class ClassCreate(BaseModel):
    grade_level: str                         # grade level (may be non numeric)
    section: str                             # section
    school_year: str                         # school year label, e.g. "2024-2025"
    class_description: Optional[str] = None


# ✅ response schema
class Class(ClassCreate):
    id: int

    class Config:
        from_attributes = True


# ✅ assign a subject (and its teacher) to a class
class ClassSubjectCreate(BaseModel):
    class_id: int
    subject_id: int
    teacher_id: Optional[int] = None


# ✅ enroll a student in a class
class ClassStudentCreate(BaseModel):
    class_id: int
    student_id: int
