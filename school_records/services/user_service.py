from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from school_records.auth.auth_handler import get_password_hash
from school_records.errors import AuthError, NotFoundError, PersistenceError, ValidationError
from school_records.models import User, UserRole

MIN_PASSWORD_LENGTH = 6


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    statement = select(User).where(User.email == email)
    return db.exec(statement).first()


def build_user(db: Session, username: str, email: str, password: str, role: UserRole) -> User:
    """Stage a new account on the session without committing it."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
    if get_user_by_email(db, email):
        raise AuthError("User already registered")
    user = User(username=username, email=email, password=get_password_hash(password), role=role)
    db.add(user)
    return user


def create_user(db: Session, username: str, email: str, password: str, role: UserRole = UserRole.student) -> User:
    user = build_user(db, username, email, password, role)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AuthError("User already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Failed to create user") from e
    db.refresh(user)
    return user
