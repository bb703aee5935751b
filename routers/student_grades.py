from fastapi import APIRouter, Depends

from dependencies.services import get_grade_aggregation
from schemas.common import SuccessEnvelope
from schemas.grades import ReportCard
from services.grade_aggregation import GradeAggregationService

router = APIRouter(prefix="/student-grades", tags=["student grades"])


# ✅ [REPORT CARD] quarter grades, final grades and overall average of one student
# - 404 when the user has no student record or no enrollment in that school year
@router.get("/{user_id}/{school_year_id}", response_model=SuccessEnvelope[ReportCard])
def get_report_card(
    user_id: int,
    school_year_id: int,
    service: GradeAggregationService = Depends(get_grade_aggregation),
):
    return {"success": True, "data": service.report_card(user_id, school_year_id)}
