from pydantic import BaseModel

class SchoolYearCreate(BaseModel):
    school_year: str                         # label, e.g. "2024-2025"
    is_active: bool = False

class SchoolYear(SchoolYearCreate):
    id: int

    class Config:
        from_attributes = True
