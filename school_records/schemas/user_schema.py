from typing import Optional

from pydantic import BaseModel

from school_records.models import UserRole, User


class UserCreateRequest(BaseModel):
    username: str
    email: str
    password: str
    confirm_password: str
    role: UserRole = UserRole.student
    # Student self sign-up also creates the profile when these are given
    full_name: Optional[str] = None
    student_number: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole

    @staticmethod
    def from_user(user: User | None) -> Optional['UserResponse']:
        if user is None:
            return None
        return UserResponse.model_validate(user.model_dump())
