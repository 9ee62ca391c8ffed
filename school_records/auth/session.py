import logging
from enum import Enum
from typing import Callable, List, Optional

from school_records.errors import AuthError
from school_records.models import UserRole

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    unauthenticated = "unauthenticated"
    role_unknown = "authenticated_role_unknown"
    student = "authenticated_student"
    teacher = "authenticated_teacher"


ROLE_STATES = {
    UserRole.student: SessionState.student,
    UserRole.teacher: SessionState.teacher,
}

SessionListener = Callable[[SessionState, 'RecordsSession'], None]


class RecordsSession:
    """
    Tracks one caller's authentication state.

    unauthenticated -> role_unknown on sign in, role_unknown -> student/teacher
    once the role is resolved, and any authenticated state -> unauthenticated
    on sign out. Listeners are told about every state change.
    """

    def __init__(self):
        self.state = SessionState.unauthenticated
        self.user_id: Optional[int] = None
        self.role: Optional[UserRole] = None
        self._listeners: List[SessionListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.state != SessionState.unauthenticated

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _move_to(self, state: SessionState) -> None:
        logger.debug(f"Session for user {self.user_id}: {self.state.value} -> {state.value}")
        self.state = state
        for listener in list(self._listeners):
            listener(state, self)

    def sign_in(self, user_id: int) -> None:
        if self.state != SessionState.unauthenticated:
            raise AuthError("Session is already signed in")
        self.user_id = user_id
        self.role = None
        self._move_to(SessionState.role_unknown)

    def resolve(self, resolve_role: Callable[[int], UserRole]) -> UserRole:
        if self.state != SessionState.role_unknown:
            raise AuthError(f"Cannot resolve role from state '{self.state.value}'")
        self.role = UserRole(resolve_role(self.user_id))
        self._move_to(ROLE_STATES[self.role])
        return self.role

    def sign_out(self) -> None:
        if self.state == SessionState.unauthenticated:
            return
        self._move_to(SessionState.unauthenticated)
        self.user_id = None
        self.role = None
