from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

# Decimal fields serialize as 2-decimal strings, e.g. "87.50"


# ✅ one row of a quarter / class / campus ranking
class RankingEntry(BaseModel):
    student_id: int
    student_name: str
    class_id: int
    grade_level: str
    section: str
    average: Optional[Decimal] = None          # None: no grades yet (listed last)
    rank: Optional[int] = None                 # dense rank, final/campus views only


# ✅ which quarters already have grades
class QuarterCheck(BaseModel):
    school_year_id: int
    all_quarters_complete: bool
    completed_quarters: List[int]
