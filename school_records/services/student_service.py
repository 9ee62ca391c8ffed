import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from school_records.configs import settings, storage
from school_records.errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from school_records.models import Attendance, Grade, Student, UserRole
from school_records.services import user_service
from school_records.utils.utils import make_photo_object_name

logger = logging.getLogger(__name__)


def list_students(db: Session) -> List[Student]:
    statement = select(Student).order_by(Student.created_at.desc(), Student.id.desc())
    return db.exec(statement).all()


def get_student(db: Session, student_id: int) -> Student:
    student = db.get(Student, student_id)
    if not student:
        raise NotFoundError(f"Student {student_id} not found")
    return student


def get_by_user_id(db: Session, user_id: int) -> Optional[Student]:
    statement = select(Student).where(Student.user_id == user_id)
    return db.exec(statement).first()


def build_profile(db: Session, user_id: Optional[int], full_name: str, student_number: str) -> Student:
    """Stage a student profile on the session without committing it."""
    existing = db.exec(select(Student).where(Student.student_number == student_number)).first()
    if existing:
        raise ConflictError(f"Student number '{student_number}' is already in use")
    if user_id is not None and get_by_user_id(db, user_id):
        raise ConflictError("This account already has a student profile")
    student = Student(user_id=user_id, full_name=full_name, student_number=student_number)
    db.add(student)
    return student


def _commit_profile(db: Session, student: Student) -> Student:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Student number or account is already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Failed to save student") from e
    db.refresh(student)
    return student


def enroll_student(db: Session, full_name: str, student_number: str, email: str, password: str,
                   username: Optional[str] = None) -> Student:
    """Create a student-role account and its profile in one transaction."""
    user = user_service.build_user(db, username or full_name, email, password, UserRole.student)
    try:
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Failed to create student account") from e
    try:
        student = build_profile(db, user.id, full_name, student_number)
    except ConflictError:
        db.rollback()
        raise
    student = _commit_profile(db, student)
    logger.info(f"Enrolled student {student.id} ({student_number}) with account {user.id}")
    return student


def register_profile(db: Session, user_id: int, full_name: str, student_number: str) -> Student:
    """Attach a profile to an existing account that has none yet."""
    user = user_service.get_user(db, user_id)
    if UserRole(user.role) != UserRole.student:
        raise ValidationError("Only student accounts can register a student profile")
    student = _commit_profile(db, build_profile(db, user_id, full_name, student_number))
    logger.info(f"User {user_id} registered student profile {student.id}")
    return student


def update_photo(db: Session, student_id: int, file_name: str, data: bytes, content_type: Optional[str]) -> Student:
    student = get_student(db, student_id)
    if not data:
        raise ValidationError("Photo file is empty")
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("Photo must be an image")

    object_name = make_photo_object_name(student_id, file_name)
    storage.upload_file(settings.STORAGE_PHOTO_BUCKET, object_name, data, content_type)
    student.photo_url = storage.public_url(settings.STORAGE_PHOTO_BUCKET, object_name)
    db.add(student)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Failed to save photo") from e
    db.refresh(student)
    logger.info(f"Stored photo {object_name} for student {student_id}")
    return student


def delete_student(db: Session, student_id: int) -> None:
    """Remove a profile with its grades and attendance. The login account is kept."""
    student = get_student(db, student_id)
    try:
        db.exec(delete(Grade).where(Grade.student_id == student_id))
        db.exec(delete(Attendance).where(Attendance.student_id == student_id))
        db.delete(student)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Deleting student {student_id} failed, rolled back: {e}")
        raise PersistenceError("Failed to delete student") from e
    logger.info(f"Deleted student {student_id}")
