"""
services/grade_aggregation.py

Academic ranking and grade aggregation.

Each public method backs one read endpoint:

- quarter_ranking      : mean of every grade row of one quarter, ordered (no rank numbers)
- final_class_ranking  : mean of every grade row of one class, dense ranked
- campus_ranking       : like final_class_ranking over every class of a school year,
                         for one quarter or "final" (all quarters)
- completed_quarters   : which quarters already have grades for a scope
- report_card          : per-subject quarters + final grade, average of the final grades
- all_grades           : per-student / per-subject grade sheet with Passed/Failed/Pending

The three averaging strategies are intentionally different (see DESIGN.md):
rankings average raw grade rows, the report card averages subject finals,
and the grade sheet does not aggregate above the subject.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional, Union

from sqlalchemy import Numeric, and_, func
from sqlalchemy.orm import Session

from models.classes import Class as ClassModel
from models.class_students import ClassStudent as ClassStudentModel
from models.class_subjects import ClassSubject as ClassSubjectModel
from models.grades import StudentGrade as StudentGradeModel
from models.school_years import SchoolYear as SchoolYearModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from models.teachers import Teacher as TeacherModel
from services.exceptions import NotFoundError, ValidationError
from services.grade_math import (
    QUARTERS,
    dense_rank,
    final_grade,
    mean_grade,
    order_by_average,
    remark_for,
    round_grade,
)
from services.scope import Scope, AllGrades, apply_scope

logger = logging.getLogger(__name__)

FINAL = "final"


def _full_name(*parts: Optional[str]) -> str:
    return " ".join(p for p in parts if p)


def _require(value, name: str):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{name} is required")
    return value.strip() if isinstance(value, str) else value


def parse_quarter(value: Union[str, int, None], allow_final: bool = False) -> Optional[int]:
    """Validate a quarter parameter. Returns None for "final" (only when allowed)."""
    if allow_final and (value is None or str(value).strip().lower() == FINAL):
        return None
    try:
        quarter = int(str(value).strip())
    except (TypeError, ValueError):
        expected = "1-4 or 'final'" if allow_final else "1-4"
        raise ValidationError(f"quarter must be {expected}, got {value!r}")
    if quarter not in QUARTERS:
        expected = "1-4 or 'final'" if allow_final else "1-4"
        raise ValidationError(f"quarter must be {expected}, got {value!r}")
    return quarter


class GradeAggregationService:
    """Read-only aggregation over enrollment and grade rows.

    The session is injected per request; the service keeps no state of its own.
    """

    def __init__(self, db: Session, passing_grade: float = 75.0):
        self.db = db
        self.passing_grade = Decimal(str(passing_grade))

    # ==========================================================
    # [lookups]
    # ==========================================================

    def school_year_by_id(self, school_year_id: int) -> SchoolYearModel:
        school_year = self.db.query(SchoolYearModel).filter(SchoolYearModel.id == school_year_id).first()
        if school_year is None:
            raise NotFoundError(f"School year {school_year_id} not found")
        return school_year

    def school_year_by_label(self, label: str) -> SchoolYearModel:
        school_year = self.db.query(SchoolYearModel).filter(SchoolYearModel.school_year == label).first()
        if school_year is None:
            raise NotFoundError(f"School year {label} not found")
        return school_year

    def _average_query(self, grade_join_extra=None):
        """Enrolled students outer-joined to their grade rows, averaged per student and class."""
        join_on = and_(
            StudentGradeModel.student_id == ClassStudentModel.student_id,
            StudentGradeModel.class_id == ClassStudentModel.class_id,
        )
        if grade_join_extra is not None:
            join_on = and_(join_on, grade_join_extra)

        return (
            self.db.query(
                StudentModel.id.label("student_id"),
                StudentModel.fname,
                StudentModel.mname,
                StudentModel.lname,
                ClassModel.id.label("class_id"),
                ClassModel.grade_level,
                ClassModel.section,
                func.avg(StudentGradeModel.grade, type_=Numeric()).label("average"),
            )
            .select_from(ClassStudentModel)
            .join(ClassModel, ClassModel.id == ClassStudentModel.class_id)
            .join(StudentModel, StudentModel.id == ClassStudentModel.student_id)
            .outerjoin(StudentGradeModel, join_on)
        )

    @staticmethod
    def _group(query):
        return query.group_by(
            StudentModel.id,
            StudentModel.fname,
            StudentModel.mname,
            StudentModel.lname,
            ClassModel.id,
            ClassModel.grade_level,
            ClassModel.section,
        )

    @staticmethod
    def _entry(row) -> Dict:
        return {
            "student_id": row.student_id,
            "student_name": _full_name(row.fname, row.mname, row.lname),
            "class_id": row.class_id,
            "grade_level": row.grade_level,
            "section": row.section,
            "average": round_grade(row.average),
        }

    # ==========================================================
    # [1] per-quarter ranking
    # ==========================================================

    def quarter_ranking(self, school_year: str, quarter, scope: Scope = AllGrades()) -> List[Dict]:
        school_year = _require(school_year, "schoolYear")
        quarter = parse_quarter(_require(quarter, "quarter"))
        self.school_year_by_label(school_year)

        query = self._average_query(StudentGradeModel.quarter == quarter)
        query = query.filter(ClassModel.school_year == school_year)
        query = apply_scope(query, ClassModel, scope)
        rows = self._group(query).all()

        logger.debug("quarter ranking %s Q%s %s: %d rows", school_year, quarter, scope, len(rows))
        return order_by_average([self._entry(r) for r in rows], key=lambda e: e["average"])

    # ==========================================================
    # [2] final ranking for one class
    # ==========================================================

    def final_class_ranking(self, school_year_id, grade_level, section) -> List[Dict]:
        school_year_id = _require(school_year_id, "schoolYearId")
        grade_level = _require(grade_level, "gradeLevel")
        section = _require(section, "section")

        school_year = self.school_year_by_id(school_year_id)
        cls = (
            self.db.query(ClassModel)
            .filter(
                ClassModel.school_year == school_year.school_year,
                ClassModel.grade_level == grade_level,
                ClassModel.section == section,
            )
            .first()
        )
        if cls is None:
            raise NotFoundError(
                f"No class {grade_level} - {section} in school year {school_year.school_year}"
            )

        query = self._average_query().filter(ClassStudentModel.class_id == cls.id)
        rows = self._group(query).all()
        return dense_rank([self._entry(r) for r in rows])

    # ==========================================================
    # [3] campus-wide ranking
    # ==========================================================

    def campus_ranking(self, school_year_id, quarter=FINAL) -> List[Dict]:
        school_year_id = _require(school_year_id, "schoolYearId")
        quarter_no = parse_quarter(quarter, allow_final=True)
        school_year = self.school_year_by_id(school_year_id)

        extra = StudentGradeModel.quarter == quarter_no if quarter_no is not None else None
        query = self._average_query(extra).filter(ClassModel.school_year == school_year.school_year)
        rows = self._group(query).all()

        logger.debug(
            "campus ranking %s %s: %d rows",
            school_year.school_year, quarter_no or FINAL, len(rows),
        )
        return dense_rank([self._entry(r) for r in rows])

    # ==========================================================
    # [4] quarter completeness
    # ==========================================================

    def completed_quarters(self, school_year_id, scope: Scope = AllGrades()) -> Dict:
        school_year_id = _require(school_year_id, "schoolYearId")
        school_year = self.school_year_by_id(school_year_id)

        query = (
            self.db.query(StudentGradeModel.quarter)
            .join(ClassModel, ClassModel.id == StudentGradeModel.class_id)
            .filter(ClassModel.school_year == school_year.school_year)
            .distinct()
        )
        query = apply_scope(query, ClassModel, scope)
        quarters = sorted({int(q) for (q,) in query.all() if q in QUARTERS})

        return {
            "school_year_id": school_year.id,
            "all_quarters_complete": len(quarters) == len(QUARTERS),
            "completed_quarters": quarters,
        }

    # ==========================================================
    # [5] report card
    # ==========================================================

    def report_card(self, user_id: int, school_year_id: int) -> Dict:
        student = self.db.query(StudentModel).filter(StudentModel.user_id == user_id).first()
        if student is None:
            raise NotFoundError(f"No student linked to user {user_id}")
        school_year = self.school_year_by_id(school_year_id)

        cls = (
            self.db.query(ClassModel)
            .join(ClassStudentModel, ClassStudentModel.class_id == ClassModel.id)
            .filter(
                ClassStudentModel.student_id == student.id,
                ClassModel.school_year == school_year.school_year,
            )
            .first()
        )
        if cls is None:
            raise NotFoundError(f"Student is not enrolled in school year {school_year.school_year}")

        subjects = (
            self.db.query(
                SubjectModel.id,
                SubjectModel.name,
                TeacherModel.fname,
                TeacherModel.lname,
            )
            .select_from(ClassSubjectModel)
            .join(SubjectModel, SubjectModel.id == ClassSubjectModel.subject_id)
            .outerjoin(TeacherModel, TeacherModel.id == ClassSubjectModel.teacher_id)
            .filter(ClassSubjectModel.class_id == cls.id)
            .order_by(SubjectModel.name)
            .all()
        )

        quarters_by_subject: Dict[int, Dict[int, Decimal]] = defaultdict(dict)
        grades = (
            self.db.query(StudentGradeModel)
            .filter(
                StudentGradeModel.student_id == student.id,
                StudentGradeModel.class_id == cls.id,
            )
            .all()
        )
        for g in grades:
            quarters_by_subject[g.subject_id][g.quarter] = g.grade

        rows = []
        for subject_id, subject_name, t_fname, t_lname in subjects:
            row = self._subject_row(subject_id, subject_name, quarters_by_subject.get(subject_id, {}))
            row["teacher_name"] = _full_name(t_fname, t_lname) or None
            rows.append(row)

        return {
            "student_id": student.id,
            "student_name": student.full_name,
            "school_year_id": school_year.id,
            "school_year": school_year.school_year,
            "class_id": cls.id,
            "grade_level": cls.grade_level,
            "section": cls.section,
            "subjects": rows,
            # subjects without a final grade are left out, not counted as zero
            "average": mean_grade(r["final_grade"] for r in rows),
        }

    @staticmethod
    def _subject_row(subject_id: int, subject_name: str, quarters: Dict[int, Decimal]) -> Dict:
        row = {"subject_id": subject_id, "subject_name": subject_name}
        for q in QUARTERS:
            row[f"quarter{q}"] = round_grade(quarters.get(q))
        row["final_grade"] = final_grade(quarters)
        return row

    # ==========================================================
    # [6] admin grade sheet
    # ==========================================================

    def all_grades(self, school_year: str) -> List[Dict]:
        school_year = _require(school_year, "schoolYear")
        self.school_year_by_label(school_year)

        pairs = (
            self.db.query(
                StudentModel.id.label("student_id"),
                StudentModel.fname,
                StudentModel.mname,
                StudentModel.lname,
                ClassModel.id.label("class_id"),
                ClassModel.grade_level,
                ClassModel.section,
                SubjectModel.id.label("subject_id"),
                SubjectModel.name.label("subject_name"),
            )
            .select_from(ClassStudentModel)
            .join(ClassModel, ClassModel.id == ClassStudentModel.class_id)
            .join(StudentModel, StudentModel.id == ClassStudentModel.student_id)
            .join(ClassSubjectModel, ClassSubjectModel.class_id == ClassModel.id)
            .join(SubjectModel, SubjectModel.id == ClassSubjectModel.subject_id)
            .filter(ClassModel.school_year == school_year)
            .order_by(StudentModel.lname, StudentModel.fname, StudentModel.id, SubjectModel.name)
            .all()
        )

        grade_rows = (
            self.db.query(StudentGradeModel)
            .join(ClassModel, ClassModel.id == StudentGradeModel.class_id)
            .filter(ClassModel.school_year == school_year)
            .all()
        )
        quarters: Dict[tuple, Dict[int, Decimal]] = defaultdict(dict)
        for g in grade_rows:
            quarters[(g.student_id, g.class_id, g.subject_id)][g.quarter] = g.grade

        students: Dict[int, Dict] = {}
        for p in pairs:
            student = students.get(p.student_id)
            if student is None:
                student = students[p.student_id] = {
                    "student_id": p.student_id,
                    "student_name": _full_name(p.fname, p.mname, p.lname),
                    "class_id": p.class_id,
                    "grade_level": p.grade_level,
                    "section": p.section,
                    "subjects": [],
                }
            row = self._subject_row(
                p.subject_id, p.subject_name, quarters.get((p.student_id, p.class_id, p.subject_id), {})
            )
            row["remarks"] = remark_for(row["final_grade"], self.passing_grade)
            student["subjects"].append(row)

        return list(students.values())
