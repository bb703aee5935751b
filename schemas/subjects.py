from pydantic import BaseModel

# ✅ input
class SubjectCreate(BaseModel):
    name: str                                # subject name

# ✅ output
class Subject(SubjectCreate):
    id: int

    class Config:
        from_attributes = True
