from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from sqlmodel import Session

from school_records.auth.auth_handler import get_current_user_id
from school_records.configs.database import get_db
from school_records.schemas.student_schema import StudentEnrollRequest, StudentRegisterRequest, StudentResponse
from school_records.schemas.summary_schema import StudentSummary
from school_records.services import records_service

router = APIRouter(prefix="/students", tags=["students"])


@router.get("/", response_model=List[StudentResponse])
def list_students(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return records_service.list_students(db, user_id)


@router.post("/", response_model=StudentResponse)
def enroll_student(request: StudentEnrollRequest, user_id: int = Depends(get_current_user_id),
                   db: Session = Depends(get_db)):
    return records_service.enroll_student(db, user_id, request)


@router.post("/me", response_model=StudentResponse)
def register_self(request: StudentRegisterRequest, user_id: int = Depends(get_current_user_id),
                  db: Session = Depends(get_db)):
    return records_service.register_self(db, user_id, request)


@router.get("/me/summary", response_model=StudentSummary)
def own_summary(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return records_service.own_summary(db, user_id)


@router.get("/{student_id}/summary", response_model=StudentSummary)
def student_summary(student_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return records_service.student_summary(db, user_id, student_id)


@router.post("/{student_id}/photo", response_model=StudentResponse)
async def upload_photo(student_id: int, file: UploadFile = File(...), user_id: int = Depends(get_current_user_id),
                       db: Session = Depends(get_db)):
    data = await file.read()
    return records_service.update_photo(db, user_id, student_id, file.filename or "", data, file.content_type)


@router.delete("/{student_id}", status_code=204)
def delete_student(student_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    records_service.delete_student(db, user_id, student_id)
