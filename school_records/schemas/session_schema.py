from typing import Optional

from pydantic import BaseModel

from school_records.auth.session import SessionState
from school_records.models import UserRole
from school_records.schemas.user_schema import UserResponse


class SessionResponse(BaseModel):
    state: SessionState
    role: Optional[UserRole] = None
    user: Optional[UserResponse] = None
