import datetime
import logging
from typing import Iterable, List, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from school_records.errors import NotFoundError, PersistenceError, ValidationError
from school_records.models import Attendance, AttendanceStatus, Student
from school_records.services import subject_service

logger = logging.getLogger(__name__)


def validate_entries(entries: Iterable[Tuple[int, str]]) -> List[Tuple[int, AttendanceStatus]]:
    validated = []
    seen = set()
    for student_id, status in entries:
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status '{status}'") from None
        if student_id in seen:
            raise ValidationError(f"Student {student_id} appears more than once in the batch")
        seen.add(student_id)
        validated.append((student_id, status))
    return validated


def list_for_day(db: Session, subject_id: int, day: datetime.date) -> List[Attendance]:
    statement = select(Attendance).where(
        (Attendance.subject_id == subject_id) & (Attendance.date == day)
    )
    return db.exec(statement).all()


def list_by_student(db: Session, student_id: int) -> List[Attendance]:
    statement = (
        select(Attendance)
        .where(Attendance.student_id == student_id)
        .order_by(Attendance.date.desc(), Attendance.subject_id)
    )
    return db.exec(statement).all()


def _ensure_students_exist(db: Session, student_ids: List[int]) -> None:
    if not student_ids:
        return
    found = set(db.exec(select(Student.id).where(Student.id.in_(student_ids))).all())
    missing = sorted(set(student_ids) - found)
    if missing:
        raise NotFoundError(f"Students not found: {', '.join(str(i) for i in missing)}")


def record_day(db: Session, subject_id: int, day: datetime.date, entries: Iterable[Tuple[int, str]],
               actor_id: int) -> None:
    """
    Replace the whole attendance sheet of a subject for one day.

    Existing rows for (subject, day) are deleted and ``entries`` inserted in
    the same transaction. Students left out of ``entries`` have no record
    afterwards. On any store failure nothing changes and the whole batch is
    reported as failed.
    """
    validated = validate_entries(entries)
    subject_service.get_subject(db, subject_id)
    _ensure_students_exist(db, [student_id for student_id, _ in validated])

    try:
        db.exec(delete(Attendance).where(
            (Attendance.subject_id == subject_id) & (Attendance.date == day)
        ))
        db.add_all([
            Attendance(student_id=student_id, subject_id=subject_id, date=day, status=status, created_by=actor_id)
            for student_id, status in validated
        ])
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Attendance batch for subject {subject_id} on {day} rolled back: {e}")
        raise PersistenceError(f"Failed to save attendance for {day}, no records were changed") from e

    logger.info(f"User {actor_id} recorded {len(validated)} attendance entries for subject {subject_id} on {day}")
