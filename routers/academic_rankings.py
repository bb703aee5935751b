from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from dependencies.services import get_grade_aggregation
from schemas.common import SuccessEnvelope
from schemas.rankings import QuarterCheck, RankingEntry
from services.grade_aggregation import FINAL, GradeAggregationService
from services.scope import build_scope

router = APIRouter(prefix="/academic-rankings", tags=["academic rankings"])

# ==========================================================
# [1] static routes (registered before the bare list route)
# ==========================================================

# ✅ [FINAL] dense-ranked final averages of one class
# - schoolYearId, gradeLevel and section are all required (400 otherwise)
@router.get("/final", response_model=SuccessEnvelope[List[RankingEntry]])
def get_final_class_ranking(
    school_year_id: Optional[int] = Query(None, alias="schoolYearId"),
    grade_level: Optional[str] = Query(None, alias="gradeLevel"),
    section: Optional[str] = Query(None),
    service: GradeAggregationService = Depends(get_grade_aggregation),
):
    data = service.final_class_ranking(school_year_id, grade_level, section)
    return {"success": True, "data": data}


# ✅ [CAMPUS] dense-ranked averages across every class of a school year
# - quarter: 1~4 or "final" (default)
@router.get("/campus", response_model=SuccessEnvelope[List[RankingEntry]])
def get_campus_ranking(
    school_year_id: Optional[int] = Query(None, alias="schoolYearId"),
    quarter: Optional[str] = Query(FINAL),
    service: GradeAggregationService = Depends(get_grade_aggregation),
):
    data = service.campus_ranking(school_year_id, quarter)
    return {"success": True, "data": data}


# ✅ [CHECK] which quarters have grades (decides whether "final" is selectable)
@router.get("/check-quarters", response_model=SuccessEnvelope[QuarterCheck])
def check_quarters(
    school_year_id: Optional[int] = Query(None, alias="schoolYearId"),
    grade_level: Optional[str] = Query(None, alias="gradeLevel"),
    section: Optional[str] = Query(None),
    service: GradeAggregationService = Depends(get_grade_aggregation),
):
    data = service.completed_quarters(school_year_id, build_scope(grade_level, section))
    return {"success": True, "data": data}


# ==========================================================
# [2] per-quarter ranking
# ==========================================================

# ✅ [QUARTER] students ordered by their average for one quarter
# - section is ignored unless gradeLevel is given too
@router.get("", response_model=SuccessEnvelope[List[RankingEntry]])
def get_quarter_ranking(
    school_year: Optional[str] = Query(None, alias="schoolYear"),
    quarter: Optional[str] = Query(None),
    grade_level: Optional[str] = Query(None, alias="gradeLevel"),
    section: Optional[str] = Query(None),
    service: GradeAggregationService = Depends(get_grade_aggregation),
):
    data = service.quarter_ranking(school_year, quarter, build_scope(grade_level, section))
    return {"success": True, "data": data}
