import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from school_records.models import AttendanceStatus
from school_records.schemas.grade_schema import CumulativeGrade
from school_records.schemas.student_schema import StudentResponse


class SubjectGradeSummary(BaseModel):
    subject_id: int
    subject_name: str
    prelim: Optional[float] = None
    midterm: Optional[float] = None
    semi_final: Optional[float] = None
    final: Optional[float] = None
    cumulative: CumulativeGrade


class AttendanceSummaryRow(BaseModel):
    subject_id: int
    subject_name: str
    date: datetime.date
    status: AttendanceStatus


class StudentSummary(BaseModel):
    student: StudentResponse
    grades: List[SubjectGradeSummary]
    attendance: List[AttendanceSummaryRow]
    attendance_totals: Dict[AttendanceStatus, int]
