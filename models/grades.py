from sqlalchemy import Column, Integer, Numeric, ForeignKey, CheckConstraint
from database.db import Base

class StudentGrade(Base):
    __tablename__ = "student_grades"  # one row per quarter per subject per student per class
    __table_args__ = (
        CheckConstraint("quarter BETWEEN 1 AND 4", name="ck_student_grades_quarter"),
        CheckConstraint("grade BETWEEN 0 AND 100", name="ck_student_grades_grade"),
    )

    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True)
    quarter = Column(Integer, primary_key=True)                 # 1..4
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="SET NULL"))
    grade = Column(Numeric(5, 2), nullable=False)               # 0.00 ~ 100.00
