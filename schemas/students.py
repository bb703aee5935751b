from pydantic import BaseModel
from typing import Optional

# ✅ input (POST/PUT)
class StudentCreate(BaseModel):
    fname: str                               # first name
    mname: Optional[str] = None              # middle name
    lname: str                               # last name
    gender: Optional[str] = None             # Male / Female
    age: Optional[int] = None                # age
    user_id: Optional[int] = None            # linked login

# ✅ output (GET)
class Student(StudentCreate):
    id: int

    class Config:
        from_attributes = True  # Pydantic v2
