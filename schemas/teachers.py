from pydantic import BaseModel
from typing import Literal, Optional

# ✅ input: create / update a teacher
class TeacherCreate(BaseModel):
    fname: str                                        # first name
    mname: Optional[str] = None                       # middle name
    lname: str                                        # last name
    gender: Optional[str] = None                      # Male / Female
    status: Literal["ACTIVE", "INACTIVE"] = "ACTIVE"  # employment status
    user_id: Optional[int] = None                     # linked login

# ✅ output
class Teacher(TeacherCreate):
    id: int

    class Config:
        from_attributes = True
