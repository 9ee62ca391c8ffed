from datetime import datetime, UTC
from typing import Optional

from sqlmodel import SQLModel, Field


class Student(SQLModel, table=True):
    __tablename__ = "students"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", unique=True)
    full_name: str
    # Human-readable school identifier, distinct from the row id
    student_number: str = Field(unique=True, index=True)
    photo_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
