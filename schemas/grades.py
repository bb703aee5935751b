from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


# ✅ input: upsert one quarter grade
class StudentGradeUpsert(BaseModel):
    student_id: int
    class_id: int
    subject_id: int
    quarter: int = Field(..., ge=1, le=4)                     # 1..4
    grade: Decimal = Field(..., ge=0, le=100, decimal_places=2)
    teacher_id: Optional[int] = None


# ✅ output: one stored grade row
class StudentGrade(StudentGradeUpsert):
    class Config:
        from_attributes = True


# ✅ one subject line of a report card / grade sheet
class SubjectGrades(BaseModel):
    subject_id: int
    subject_name: str
    quarter1: Optional[Decimal] = None
    quarter2: Optional[Decimal] = None
    quarter3: Optional[Decimal] = None
    quarter4: Optional[Decimal] = None
    final_grade: Optional[Decimal] = None     # only when all four quarters exist


class ReportCardSubject(SubjectGrades):
    teacher_name: Optional[str] = None


# ✅ student report card for one school year
class ReportCard(BaseModel):
    student_id: int
    student_name: str
    school_year_id: int
    school_year: str
    class_id: int
    grade_level: str
    section: str
    subjects: List[ReportCardSubject]
    average: Optional[Decimal] = None         # mean of the subjects' final grades


class GradeSheetSubject(SubjectGrades):
    remarks: str                              # Passed / Failed / Pending


# ✅ admin grade sheet, grouped by student then subject
class GradeSheetStudent(BaseModel):
    student_id: int
    student_name: str
    class_id: int
    grade_level: str
    section: str
    subjects: List[GradeSheetSubject]
