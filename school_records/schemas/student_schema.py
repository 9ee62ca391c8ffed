from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class StudentEnrollRequest(BaseModel):
    """Teacher-initiated enrollment: creates the login and the profile together."""
    full_name: str = Field(min_length=1)
    student_number: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=6)


class StudentRegisterRequest(BaseModel):
    full_name: str = Field(min_length=1)
    student_number: str = Field(min_length=1)


class StudentResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    full_name: str
    student_number: str
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None
