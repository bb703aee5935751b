from sqlalchemy import Column, Integer, ForeignKey
from database.db import Base

class ClassStudent(Base):
    __tablename__ = "class_students"  # enrollment

    # one class per student per school year is checked in services.enrollment
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
