from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from school_records.auth.auth_handler import get_current_user_id
from school_records.configs.database import get_db
from school_records.models import Subject
from school_records.schemas.subject_schema import SubjectCreateRequest
from school_records.services import records_service, subject_service

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("/", response_model=List[Subject])
def list_subjects(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return subject_service.list_all(db)


@router.post("/", response_model=Subject)
def create_subject(request: SubjectCreateRequest, user_id: int = Depends(get_current_user_id),
                   db: Session = Depends(get_db)):
    return records_service.create_subject(db, user_id, request)


@router.get("/{subject_id}", response_model=Subject)
def get_subject(subject_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return subject_service.get_subject(db, subject_id)


@router.delete("/{subject_id}", status_code=204)
def delete_subject(subject_id: int, user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    records_service.delete_subject(db, user_id, subject_id)
