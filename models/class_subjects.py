from sqlalchemy import Column, Integer, ForeignKey
from database.db import Base

class ClassSubject(Base):
    __tablename__ = "class_subjects"  # which teacher teaches which subject in a class

    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="SET NULL"))
