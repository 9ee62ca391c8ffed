import datetime
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from school_records.auth.auth_handler import get_current_user_id
from school_records.configs.database import get_db
from school_records.schemas.attendance_schema import AttendanceDayRequest, RosterAttendanceRow
from school_records.services import records_service

router = APIRouter(prefix="/subjects", tags=["attendance"])


@router.get("/{subject_id}/attendance/{day}", response_model=List[RosterAttendanceRow])
def roster_with_attendance(subject_id: int, day: datetime.date, user_id: int = Depends(get_current_user_id),
                           db: Session = Depends(get_db)):
    return records_service.roster_with_attendance(db, user_id, subject_id, day)


@router.put("/{subject_id}/attendance/{day}", response_model=List[RosterAttendanceRow])
def record_attendance(subject_id: int, day: datetime.date, request: AttendanceDayRequest,
                      user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    entries = [(entry.student_id, entry.status) for entry in request.entries]
    return records_service.submit_attendance(db, user_id, subject_id, day, entries)
