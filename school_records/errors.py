"""
Error kinds surfaced by the records services.

Every service raises one of these; the FastAPI app turns them into
``{"detail": message}`` responses using ``status_code``.
"""


class RecordsError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecordsError):
    """Input rejected before any write."""
    status_code = 422


class NotFoundError(RecordsError):
    status_code = 404


class AuthError(RecordsError):
    """Credentials, sign-up or token rejected."""
    status_code = 401


class ForbiddenError(RecordsError):
    status_code = 403


class ConflictError(RecordsError):
    status_code = 409


class PersistenceError(RecordsError):
    """Store unreachable or transaction aborted. Nothing was written."""
    status_code = 503


class StorageError(PersistenceError):
    pass
