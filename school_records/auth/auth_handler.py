from datetime import datetime, timedelta, UTC
from typing import Dict

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlmodel import Session, select

from school_records.configs import settings
from school_records.errors import AuthError
from school_records.models import User

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def authenticate_user(db_session: Session, email: str, password: str):
    statement = select(User).where(User.email == email)
    result = db_session.exec(statement).first()
    if not result or not verify_password(password, result.password):
        return None
    return result

def _claims(user: Dict) -> Dict:
    return {
        "sub": user.get("email") or user.get("sub"),
        "id": user["id"],
        "username": user["username"],
    }

def create_access_token(user: Dict, expires_delta: timedelta | None = None):
    # Role is deliberately not a claim, it is resolved from the profile on each request
    to_encode = _claims(user)
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_ACCESS_SECRET, algorithm=ALGORITHM)

def create_refresh_token(user: Dict):
    to_encode = _claims(user)
    to_encode["exp"] = datetime.now(UTC) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return jwt.encode(to_encode, settings.JWT_REFRESH_SECRET, algorithm=ALGORITHM)

def decode_access_token(token: str) -> Dict:
    try:
        return jwt.decode(token, settings.JWT_ACCESS_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthError("Could not validate credentials") from None

def verify_refresh_token(token: str):
    try:
        return jwt.decode(token, settings.JWT_REFRESH_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthError("Invalid refresh token") from None

def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    payload = decode_access_token(token)
    user_id = payload.get("id")
    if user_id is None:
        raise AuthError("Could not validate credentials")
    return user_id
