"""
services/scope.py

Grade level / section filter used by the ranking and quarter-check queries.

    Scope = AllGrades | GradeLevel(level) | GradeSection(level, section)

The browser client sends "all"-style sentinel strings for "no filter";
build_scope() folds those into AllGrades / GradeLevel.
"""

from dataclasses import dataclass
from typing import Optional, Union

from services.exceptions import ValidationError

# values the client uses to mean "no filter"
_ALL_SENTINELS = {"", "all", "all grades", "all grade levels", "all sections", "null", "undefined"}


@dataclass(frozen=True)
class AllGrades:
    pass


@dataclass(frozen=True)
class GradeLevel:
    level: str


@dataclass(frozen=True)
class GradeSection:
    level: str
    section: str

    def __post_init__(self):
        if not self.level:
            raise ValidationError("A section filter requires a grade level")
        if not self.section:
            raise ValidationError("GradeSection requires a section")


Scope = Union[AllGrades, GradeLevel, GradeSection]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if value.lower() in _ALL_SENTINELS:
        return None
    return value


def build_scope(grade_level: Optional[str] = None, section: Optional[str] = None) -> Scope:
    """Turn raw query parameters into a Scope.

    A section without a grade level is dropped rather than applied on its own.
    """
    level = _clean(grade_level)
    sec = _clean(section)
    if level is None:
        return AllGrades()
    if sec is None:
        return GradeLevel(level)
    return GradeSection(level, sec)


def apply_scope(query, class_model, scope: Scope):
    """Add the grade level / section filters of `scope` to a query over `class_model`."""
    if isinstance(scope, GradeSection):
        return query.filter(class_model.grade_level == scope.level, class_model.section == scope.section)
    if isinstance(scope, GradeLevel):
        return query.filter(class_model.grade_level == scope.level)
    return query
