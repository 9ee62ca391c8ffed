from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

class UserRole(str, Enum):
    student = "student"
    teacher = "teacher"


class User(SQLModel, table=True):
    """User model represents an account known to the identity provider."""
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str
    email: str = Field(unique=True, index=True)
    password: str = Field(exclude=True)
    role: UserRole = Field(default=UserRole.student)  # fixed at sign-up
