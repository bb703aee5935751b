from typing import List

from fastapi import APIRouter, Depends

from dependencies.services import get_grade_aggregation
from schemas.common import SuccessEnvelope
from schemas.grades import GradeSheetStudent
from services.grade_aggregation import GradeAggregationService

router = APIRouter(prefix="/admin", tags=["admin"])


# ✅ [GRADE SHEET] every student x subject of a school year with remarks
# - school_year is the label, e.g. 2024-2025
@router.get("/all-grades/{school_year}", response_model=SuccessEnvelope[List[GradeSheetStudent]])
def get_all_grades(
    school_year: str,
    service: GradeAggregationService = Depends(get_grade_aggregation),
):
    return {"success": True, "data": service.all_grades(school_year)}
