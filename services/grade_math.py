"""
services/grade_math.py

Pure grade arithmetic shared by the ranking, report card and grade sheet views.

- Every average is rounded to 2 decimals (ROUND_HALF_UP) when it is computed.
- A final grade exists only when all four quarter grades exist.
- Rankings sort by descending average; entries without an average go last
  and get no rank.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

QUARTERS = (1, 2, 3, 4)
TWO_PLACES = Decimal("0.01")

PASSED = "Passed"
FAILED = "Failed"
PENDING = "Pending"

Number = Union[Decimal, float, int, str]
T = TypeVar("T")


def round_grade(value: Optional[Number]) -> Optional[Decimal]:
    """Round to 2 decimal places, keeping None as None."""
    if value is None:
        return None
    if not isinstance(value, Decimal):
        # str() keeps floats like 87.5 from picking up binary noise
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def mean_grade(values: Iterable[Optional[Number]]) -> Optional[Decimal]:
    """Mean of the non-null values, rounded; None for an empty input."""
    present = [v if isinstance(v, Decimal) else Decimal(str(v)) for v in values if v is not None]
    if not present:
        return None
    return round_grade(sum(present) / len(present))


def final_grade(quarters: Mapping[int, Optional[Number]]) -> Optional[Decimal]:
    """Mean of the four quarter grades, or None when any quarter is missing."""
    values = [quarters.get(q) for q in QUARTERS]
    if any(v is None for v in values):
        return None
    return mean_grade(values)


def remark_for(final: Optional[Number], passing_grade: Number = 75) -> str:
    if final is None:
        return PENDING
    return PASSED if Decimal(str(final)) >= Decimal(str(passing_grade)) else FAILED


def order_by_average(entries: Sequence[T], key: Callable[[T], Optional[Decimal]]) -> List[T]:
    """Stable sort, highest average first, entries without an average last."""
    return sorted(entries, key=lambda e: (key(e) is None, -(key(e) or 0)))


def dense_rank(entries: Sequence[Dict], field: str = "average") -> List[Dict]:
    """Order dict entries by `field` and annotate them with a dense `rank`.

    Ties share a rank and the next distinct value gets the next integer
    (95, 95, 90 -> 1, 1, 2). Entries without a value get rank None.
    """
    ranked = order_by_average(entries, key=lambda e: e.get(field))
    rank, previous = 0, None
    for entry in ranked:
        value = entry.get(field)
        if value is None:
            entry["rank"] = None
            continue
        if value != previous:
            rank += 1
            previous = value
        entry["rank"] = rank
    return ranked
