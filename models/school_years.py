from sqlalchemy import Column, Integer, String, Boolean
from database.db import Base

class SchoolYear(Base):
    __tablename__ = "school_years"  # school year lookup

    id = Column(Integer, primary_key=True, index=True)               # school year id (PK)
    school_year = Column(String(20), unique=True, nullable=False)    # label, e.g. "2024-2025"
    is_active = Column(Boolean, default=False, nullable=False)       # current school year
