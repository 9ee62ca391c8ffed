from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import school_records.models  # noqa: F401
from school_records.auth.auth_handler import get_password_hash
from school_records.models import Student, Subject, User, UserRole

PASSWORD = "secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)


def make_engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    return engine


def add_user(db: Session, email: str, role: UserRole = UserRole.student) -> User:
    user = User(username=email.split("@")[0], email=email, password=PASSWORD_HASH, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_student(db: Session, full_name: str, student_number: str, user_id=None) -> Student:
    student = Student(full_name=full_name, student_number=student_number, user_id=user_id)
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def add_subject(db: Session, name: str, created_by=None) -> Subject:
    subject = Subject(name=name, semester="1st", school_year="2025-2026", created_by=created_by)
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject
