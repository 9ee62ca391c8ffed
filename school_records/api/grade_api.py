from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from school_records.auth.auth_handler import get_current_user_id
from school_records.configs.database import get_db
from school_records.schemas.grade_schema import GradeResponse, GradeTermUpdate, RosterGradeRow
from school_records.services import records_service

router = APIRouter(prefix="/subjects", tags=["grades"])


@router.get("/{subject_id}/grades", response_model=List[RosterGradeRow])
def roster_with_grades(subject_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return records_service.roster_with_grades(db, user_id, subject_id)


@router.put("/{subject_id}/grades/{student_id}", response_model=GradeResponse)
def update_grade(subject_id: int, student_id: int, update: GradeTermUpdate,
                 user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return records_service.submit_grade(db, user_id, subject_id, student_id, update.term, update.value)
