from typing import List, Optional

from pydantic import BaseModel

from school_records.models import AttendanceStatus
from school_records.schemas.student_schema import StudentResponse


class AttendanceEntry(BaseModel):
    student_id: int
    # checked by the attendance ledger so bad values surface as ValidationError
    status: str


class AttendanceDayRequest(BaseModel):
    entries: List[AttendanceEntry]


class RosterAttendanceRow(BaseModel):
    student: StudentResponse
    status: Optional[AttendanceStatus] = None
