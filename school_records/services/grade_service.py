import logging
import math
from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from school_records.errors import PersistenceError, ValidationError
from school_records.models import Grade, GradeTerm
from school_records.services import student_service, subject_service

logger = logging.getLogger(__name__)

MIN_GRADE = 1.0
MAX_GRADE = 5.0


def validate_term(term) -> GradeTerm:
    try:
        return GradeTerm(term)
    except ValueError:
        raise ValidationError(f"Unknown grading term '{term}'") from None


def validate_value(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Please enter a valid grade between 1.0 and 5.0")
    value = float(value)
    if not math.isfinite(value) or value < MIN_GRADE or value > MAX_GRADE:
        raise ValidationError("Please enter a valid grade between 1.0 and 5.0")
    return value


def get_by_student_subject(db: Session, student_id: int, subject_id: int) -> Optional[Grade]:
    statement = select(Grade).where(
        (Grade.student_id == student_id) & (Grade.subject_id == subject_id)
    )
    return db.exec(statement).first()


def list_by_subject(db: Session, subject_id: int) -> List[Grade]:
    statement = select(Grade).where(Grade.subject_id == subject_id)
    return db.exec(statement).all()


def list_by_student(db: Session, student_id: int) -> List[Grade]:
    statement = select(Grade).where(Grade.student_id == student_id)
    return db.exec(statement).all()


def _update_term(db: Session, grade_id: int, term: GradeTerm, value: float, actor_id: int) -> None:
    # Single-column UPDATE keyed by id: the store does the merge, other terms are never rewritten
    statement = (
        update(Grade)
        .where(Grade.id == grade_id)
        .values({term.value: value, "updated_at": datetime.now(UTC), "updated_by": actor_id})
    )
    db.exec(statement)
    db.commit()


def _insert_term(db: Session, student_id: int, subject_id: int, term: GradeTerm, value: float,
                 actor_id: int) -> Grade:
    now = datetime.now(UTC)
    grade = Grade(student_id=student_id, subject_id=subject_id, created_by=actor_id, created_at=now,
                  updated_at=now, updated_by=actor_id, **{term.value: value})
    db.add(grade)
    try:
        db.commit()
        return grade
    except IntegrityError:
        # Another writer created the row first, merge into theirs
        db.rollback()
        existing = get_by_student_subject(db, student_id, subject_id)
        if existing is None:
            raise
        logger.warning(f"Grade row for student {student_id} subject {subject_id} created concurrently, merging")
        _update_term(db, existing.id, term, value, actor_id)
        return existing


def record_term(db: Session, student_id: int, subject_id: int, term, value, actor_id: int) -> Grade:
    """
    Set one term of the (student, subject) grade row, creating the row if needed.

    Other terms are left untouched. Fails with ValidationError before any write
    when the term is unknown or the value is outside [1.0, 5.0].
    """
    term = validate_term(term)
    value = validate_value(value)
    student_service.get_student(db, student_id)
    subject_service.get_subject(db, subject_id)

    try:
        grade = get_by_student_subject(db, student_id, subject_id)
        if grade is None:
            grade = _insert_term(db, student_id, subject_id, term, value, actor_id)
        else:
            _update_term(db, grade.id, term, value, actor_id)
        db.refresh(grade)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Saving {term.value} grade for student {student_id} subject {subject_id} failed: {e}")
        raise PersistenceError("Failed to save grade") from e

    logger.info(f"User {actor_id} set {term.value}={value} for student {student_id} in subject {subject_id}")
    return grade
