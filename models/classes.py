from sqlalchemy import Column, Integer, String, Text, ForeignKey
from database.db import Base

class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # class id (PK)
    grade_level = Column(String(20), nullable=False)        # "7", "Grade 7", "Kinder" ...
    section = Column(String(20), nullable=False)            # section name (e.g. A)
    class_description = Column(Text)                        # free text

    # ==========================================================
    # [Relations]
    # ==========================================================

    # ✅ school year label (FK)
    #    - references school_years.school_year, not the numeric id
    school_year = Column(
        String(20),
        ForeignKey("school_years.school_year"),
        nullable=False,
        index=True,
    )

    @property
    def display_name(self) -> str:
        return f"{self.grade_level} - {self.section}"
