import logging
from typing import Dict

from sqlmodel import Session

from school_records.auth.auth_handler import (
    authenticate_user, create_access_token, create_refresh_token, verify_refresh_token,
)
from school_records.errors import AuthError, ValidationError
from school_records.models import User, UserRole
from school_records.schemas.user_schema import UserCreateRequest
from school_records.services import student_service, user_service

logger = logging.getLogger(__name__)


def sign_up(db: Session, request: UserCreateRequest) -> User:
    if request.password != request.confirm_password:
        raise ValidationError("Passwords do not match")

    wants_profile = bool(request.full_name or request.student_number)
    if wants_profile:
        if request.role != UserRole.student:
            raise ValidationError("Only students can sign up with a student profile")
        if not (request.full_name and request.student_number):
            raise ValidationError("Full name and student number are both required for a student profile")
        student = student_service.enroll_student(
            db, request.full_name, request.student_number, request.email, request.password,
            username=request.username,
        )
        user = user_service.get_user(db, student.user_id)
    else:
        user = user_service.create_user(db, request.username, request.email, request.password, request.role)

    logger.info(f"Signed up user {user.id} as {UserRole(user.role).value}")
    return user


def _token_subject(user: User) -> Dict:
    return {"id": user.id, "email": user.email, "username": user.username}


def sign_in(db: Session, email: str, password: str) -> Dict[str, str]:
    user = authenticate_user(db, email, password)
    if not user:
        raise AuthError("Invalid login credentials")
    return {
        "access_token": create_access_token(_token_subject(user)),
        "refresh_token": create_refresh_token(_token_subject(user)),
        "token_type": "bearer",
    }


def refresh(refresh_token: str) -> Dict[str, str]:
    payload = verify_refresh_token(refresh_token)
    return {
        "access_token": create_access_token(payload),
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }
