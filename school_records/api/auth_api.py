from fastapi import Depends, APIRouter, Body
from sqlmodel import Session

from school_records.auth.auth_handler import get_current_user_id
from school_records.auth.session import RecordsSession
from school_records.configs.database import get_db
from school_records.models import User
from school_records.schemas.session_schema import SessionResponse
from school_records.schemas.token import Token
from school_records.schemas.user_schema import UserCreateRequest, UserResponse
from school_records.services import auth_service, role_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=UserResponse)
def signup(request: UserCreateRequest, db: Session = Depends(get_db)):
    return UserResponse.from_user(auth_service.sign_up(db, request))


@router.post("/login", response_model=Token)
def login(email: str = Body(...), password: str = Body(...), db: Session = Depends(get_db)):
    return auth_service.sign_in(db, email, password)


@router.post("/refresh", response_model=Token)
def refresh_token(refresh_token: str = Body(..., embed=True)):
    return auth_service.refresh(refresh_token)


@router.get("/session", response_model=SessionResponse)
def current_session(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    session = RecordsSession()
    session.sign_in(user_id)
    role = session.resolve(lambda uid: role_service.resolve_role(db, uid))
    return SessionResponse(state=session.state, role=role, user=UserResponse.from_user(db.get(User, user_id)))
