from typing import Optional

from sqlmodel import SQLModel, Field

class Subject(SQLModel, table=True):
    __tablename__ = "subjects"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    semester: str
    school_year: str
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
