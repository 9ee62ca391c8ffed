from typing import Any, Mapping, Optional

from school_records.schemas.grade_schema import CumulativeGrade, GradeStatus

# Lower is better on the 1.0 - 5.0 scale
FAILING_THRESHOLD = 3.0


def _raw_term(raw: Any, term: str) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return raw.get(term)
    return getattr(raw, term, None)


def _blend(previous: Optional[float], current: Optional[float]) -> Optional[float]:
    if previous is None:
        return None
    if current is None:
        return previous
    return (previous + current) / 2


def cumulative(raw: Any) -> CumulativeGrade:
    """
    Turn raw term scores into running cumulative grades.

    Each stage averages the previous cumulative value with the new raw term,
    so later terms weigh less individually. Missing terms carry the previous
    stage forward; a missing prelim leaves every stage empty. ``raw`` may be a
    Grade row, any object with term attributes, a mapping, or None.
    """
    prelim = _raw_term(raw, "prelim")
    midterm = _blend(prelim, _raw_term(raw, "midterm"))
    semi_final = _blend(midterm, _raw_term(raw, "semi_final"))
    final = _blend(semi_final, _raw_term(raw, "final"))

    status = None
    if final is not None:
        status = GradeStatus.failed if final >= FAILING_THRESHOLD else GradeStatus.passed

    return CumulativeGrade(prelim=prelim, midterm=midterm, semi_final=semi_final, final=final, status=status)
