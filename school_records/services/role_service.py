import logging

from sqlmodel import Session

from school_records.errors import ForbiddenError
from school_records.models import User, UserRole

logger = logging.getLogger(__name__)

FALLBACK_ROLE = UserRole.student


def resolve_role(db: Session, user_id: int) -> UserRole:
    """
    Role of the user's profile, or ``student`` when it cannot be determined.

    Never raises: a signed-in user without a readable profile gets the least
    privileged role instead of being locked out.
    """
    try:
        user = db.get(User, user_id)
        if user is None:
            logger.warning(f"No profile for user {user_id}, falling back to '{FALLBACK_ROLE.value}'")
            return FALLBACK_ROLE
        return UserRole(user.role)
    except Exception as e:
        db.rollback()
        logger.warning(f"Role check failed for user {user_id}, falling back to '{FALLBACK_ROLE.value}': {e}")
        return FALLBACK_ROLE


def ensure_teacher(db: Session, user_id: int) -> None:
    if resolve_role(db, user_id) != UserRole.teacher:
        raise ForbiddenError("Only teachers can do this")
