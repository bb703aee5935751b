from fastapi import Depends
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from services.grade_aggregation import GradeAggregationService


def get_grade_aggregation(db: Session = Depends(get_db)) -> GradeAggregationService:
    """Per-request aggregation service bound to the request's session."""
    return GradeAggregationService(db, passing_grade=settings.PASSING_GRADE)
