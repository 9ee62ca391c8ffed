"""
Entry point used by the API routers.

Writes check the caller's role before delegating to the grade and attendance
ledgers; reads build the roster and summary views straight from the store on
every call.
"""
import datetime
from typing import Iterable, List, Tuple

from sqlmodel import Session

from school_records.errors import AuthError, ConflictError, NotFoundError
from school_records.models import AttendanceStatus, Student, Subject
from school_records.schemas.attendance_schema import RosterAttendanceRow
from school_records.schemas.grade_schema import GradeResponse, RosterGradeRow
from school_records.schemas.student_schema import StudentEnrollRequest, StudentRegisterRequest, StudentResponse
from school_records.schemas.subject_schema import SubjectCreateRequest
from school_records.schemas.summary_schema import AttendanceSummaryRow, StudentSummary, SubjectGradeSummary
from school_records.services import (
    attendance_service, grade_service, role_service, student_service, subject_service,
)
from school_records.services.grade_aggregator import cumulative


def _student_response(student: Student) -> StudentResponse:
    return StudentResponse.model_validate(student.model_dump())


def _roster(db: Session) -> List[Student]:
    return sorted(student_service.list_students(db), key=lambda s: (s.full_name.lower(), s.id))


def _ensure_owner_or_teacher(db: Session, actor_id: int, student: Student) -> None:
    if student.user_id is not None and student.user_id == actor_id:
        return
    role_service.ensure_teacher(db, actor_id)


# Read views

def roster_with_grades(db: Session, actor_id: int, subject_id: int) -> List[RosterGradeRow]:
    role_service.ensure_teacher(db, actor_id)
    subject_service.get_subject(db, subject_id)
    grades = {grade.student_id: grade for grade in grade_service.list_by_subject(db, subject_id)}

    rows = []
    for student in _roster(db):
        grade = grades.get(student.id)
        rows.append(RosterGradeRow(
            student=_student_response(student),
            grade_id=grade.id if grade else None,
            prelim=grade.prelim if grade else None,
            midterm=grade.midterm if grade else None,
            semi_final=grade.semi_final if grade else None,
            final=grade.final if grade else None,
            cumulative=cumulative(grade),
        ))
    return rows


def roster_with_attendance(db: Session, actor_id: int, subject_id: int,
                           day: datetime.date) -> List[RosterAttendanceRow]:
    role_service.ensure_teacher(db, actor_id)
    subject_service.get_subject(db, subject_id)
    statuses = {record.student_id: record.status for record in attendance_service.list_for_day(db, subject_id, day)}
    return [
        RosterAttendanceRow(student=_student_response(student), status=statuses.get(student.id))
        for student in _roster(db)
    ]


def _subject_names(db: Session, subject_ids) -> dict:
    return {subject_id: db.get(Subject, subject_id).name for subject_id in set(subject_ids)}


def student_summary(db: Session, actor_id: int, student_id: int) -> StudentSummary:
    student = student_service.get_student(db, student_id)
    _ensure_owner_or_teacher(db, actor_id, student)

    grades = grade_service.list_by_student(db, student_id)
    attendance = attendance_service.list_by_student(db, student_id)
    names = _subject_names(db, [g.subject_id for g in grades] + [a.subject_id for a in attendance])

    grade_rows = sorted(
        (
            SubjectGradeSummary(
                subject_id=grade.subject_id,
                subject_name=names[grade.subject_id],
                prelim=grade.prelim,
                midterm=grade.midterm,
                semi_final=grade.semi_final,
                final=grade.final,
                cumulative=cumulative(grade),
            )
            for grade in grades
        ),
        key=lambda row: row.subject_name.lower(),
    )
    attendance_rows = [
        AttendanceSummaryRow(
            subject_id=record.subject_id,
            subject_name=names[record.subject_id],
            date=record.date,
            status=record.status,
        )
        for record in attendance
    ]
    totals = {status: 0 for status in AttendanceStatus}
    for record in attendance:
        totals[AttendanceStatus(record.status)] += 1

    return StudentSummary(
        student=_student_response(student),
        grades=grade_rows,
        attendance=attendance_rows,
        attendance_totals=totals,
    )


def own_summary(db: Session, user_id: int) -> StudentSummary:
    student = student_service.get_by_user_id(db, user_id)
    if student is None:
        raise NotFoundError("Student record not found")
    return student_summary(db, user_id, student.id)


# Writes

def submit_grade(db: Session, actor_id: int, subject_id: int, student_id: int, term, value) -> GradeResponse:
    role_service.ensure_teacher(db, actor_id)
    grade = grade_service.record_term(db, student_id, subject_id, term, value, actor_id)
    return GradeResponse.from_grade(grade)


def submit_attendance(db: Session, actor_id: int, subject_id: int, day: datetime.date,
                      entries: Iterable[Tuple[int, str]]) -> List[RosterAttendanceRow]:
    role_service.ensure_teacher(db, actor_id)
    attendance_service.record_day(db, subject_id, day, entries, actor_id)
    return roster_with_attendance(db, actor_id, subject_id, day)


def create_subject(db: Session, actor_id: int, request: SubjectCreateRequest) -> Subject:
    role_service.ensure_teacher(db, actor_id)
    return subject_service.create_subject(db, request.name, request.semester, request.school_year, actor_id)


def delete_subject(db: Session, actor_id: int, subject_id: int) -> None:
    role_service.ensure_teacher(db, actor_id)
    subject_service.delete_subject(db, subject_id)


def enroll_student(db: Session, actor_id: int, request: StudentEnrollRequest) -> StudentResponse:
    role_service.ensure_teacher(db, actor_id)
    try:
        student = student_service.enroll_student(
            db, request.full_name, request.student_number, request.email, request.password,
        )
    except AuthError as e:
        # the caller is signed in, a taken e-mail is a conflict and not a credentials problem
        raise ConflictError(e.message) from e
    return _student_response(student)


def register_self(db: Session, actor_id: int, request: StudentRegisterRequest) -> StudentResponse:
    student = student_service.register_profile(db, actor_id, request.full_name, request.student_number)
    return _student_response(student)


def delete_student(db: Session, actor_id: int, student_id: int) -> None:
    role_service.ensure_teacher(db, actor_id)
    student_service.delete_student(db, student_id)


def update_photo(db: Session, actor_id: int, student_id: int, file_name: str, data: bytes,
                 content_type) -> StudentResponse:
    student = student_service.get_student(db, student_id)
    _ensure_owner_or_teacher(db, actor_id, student)
    student = student_service.update_photo(db, student_id, file_name, data, content_type)
    return _student_response(student)


def list_students(db: Session, actor_id: int) -> List[StudentResponse]:
    role_service.ensure_teacher(db, actor_id)
    return [_student_response(student) for student in student_service.list_students(db)]
