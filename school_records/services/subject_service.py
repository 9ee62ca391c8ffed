import logging
from typing import List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from school_records.errors import NotFoundError, PersistenceError
from school_records.models import Attendance, Grade, Subject

logger = logging.getLogger(__name__)


def list_all(db: Session) -> List[Subject]:
    statement = select(Subject).order_by(Subject.school_year, Subject.semester, Subject.name)
    return db.exec(statement).all()


def get_subject(db: Session, subject_id: int) -> Subject:
    subject = db.get(Subject, subject_id)
    if not subject:
        raise NotFoundError(f"Subject {subject_id} not found")
    return subject


def create_subject(db: Session, name: str, semester: str, school_year: str, created_by: int) -> Subject:
    subject = Subject(name=name, semester=semester, school_year=school_year, created_by=created_by)
    db.add(subject)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError("Failed to create subject") from e
    db.refresh(subject)
    logger.info(f"User {created_by} created subject {subject.id} '{name}'")
    return subject


def delete_subject(db: Session, subject_id: int) -> None:
    """Delete a subject together with its grades and attendance, all or nothing."""
    subject = get_subject(db, subject_id)
    try:
        db.exec(delete(Grade).where(Grade.subject_id == subject_id))
        db.exec(delete(Attendance).where(Attendance.subject_id == subject_id))
        db.delete(subject)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Deleting subject {subject_id} failed, rolled back: {e}")
        raise PersistenceError("Failed to delete subject") from e
    logger.info(f"Deleted subject {subject_id}")
