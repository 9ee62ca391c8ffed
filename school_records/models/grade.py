from datetime import datetime, UTC
from enum import Enum
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class GradeTerm(str, Enum):
    prelim = "prelim"
    midterm = "midterm"
    semi_final = "semi_final"
    final = "final"


class Grade(SQLModel, table=True):
    """Raw term scores of one student in one subject. 1.0 is best, 5.0 is failing."""
    __tablename__ = "grades"
    __table_args__ = (UniqueConstraint("student_id", "subject_id", name="uq_grades_student_subject"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    student_id: int = Field(foreign_key="students.id", index=True)
    subject_id: int = Field(foreign_key="subjects.id", index=True)
    prelim: Optional[float] = None
    midterm: Optional[float] = None
    semi_final: Optional[float] = None
    final: Optional[float] = None
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = Field(default=None, foreign_key="users.id")
