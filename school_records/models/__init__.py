from .user import User, UserRole
from .student import Student
from .subject import Subject
from .grade import Grade, GradeTerm
from .attendance import Attendance, AttendanceStatus

__all__ = [
    'User', 'UserRole',
    'Student',
    'Subject',
    'Grade', 'GradeTerm',
    'Attendance', 'AttendanceStatus',
]
