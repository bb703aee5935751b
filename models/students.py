from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # student roster

    id = Column(Integer, primary_key=True, index=True)                      # student id (PK)
    fname = Column(String(50), nullable=False)                              # first name
    mname = Column(String(50))                                              # middle name
    lname = Column(String(50), nullable=False)                              # last name
    gender = Column(String(10))                                             # Male / Female
    age = Column(Integer)                                                   # age
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))  # linked login (FK)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.fname, self.mname, self.lname) if p)
