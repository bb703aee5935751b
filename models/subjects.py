from sqlalchemy import Column, Integer, String
from database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # subject catalogue

    id = Column(Integer, primary_key=True, index=True)                 # subject id (PK)
    name = Column(String(100), nullable=False, unique=True)           # subject name (e.g. Mathematics)
