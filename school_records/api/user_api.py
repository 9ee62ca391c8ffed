from fastapi import APIRouter, Depends
from sqlmodel import Session

from school_records.auth.auth_handler import get_current_user_id
from school_records.configs.database import get_db
from school_records.schemas.user_schema import UserResponse
from school_records.services import user_service

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserResponse)
def read_users_me(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return UserResponse.from_user(user_service.get_user(db, user_id))
