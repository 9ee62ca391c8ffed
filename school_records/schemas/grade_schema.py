from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, StrictFloat, StrictInt

from school_records.models import Grade
from school_records.schemas.student_schema import StudentResponse


class GradeStatus(str, Enum):
    passed = "Passed"
    failed = "Failed"


class CumulativeGrade(BaseModel):
    """Running averages derived from the raw terms, never stored."""
    prelim: Optional[float] = None
    midterm: Optional[float] = None
    semi_final: Optional[float] = None
    final: Optional[float] = None
    status: Optional[GradeStatus] = None


class GradeTermUpdate(BaseModel):
    term: str
    # no coercion from strings, matches grade_service.validate_value
    value: Union[StrictInt, StrictFloat]


class GradeResponse(BaseModel):
    id: int
    student_id: int
    subject_id: int
    prelim: Optional[float] = None
    midterm: Optional[float] = None
    semi_final: Optional[float] = None
    final: Optional[float] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None
    cumulative: CumulativeGrade

    @staticmethod
    def from_grade(grade: Grade) -> 'GradeResponse':
        # local import, the aggregator module imports this schema
        from school_records.services.grade_aggregator import cumulative

        return GradeResponse(**grade.model_dump(include={
            "id", "student_id", "subject_id", "prelim", "midterm", "semi_final", "final",
            "updated_at", "updated_by",
        }), cumulative=cumulative(grade))


class RosterGradeRow(BaseModel):
    student: StudentResponse
    grade_id: Optional[int] = None
    prelim: Optional[float] = None
    midterm: Optional[float] = None
    semi_final: Optional[float] = None
    final: Optional[float] = None
    cumulative: CumulativeGrade
