class ApplicationValidationError(ValueError):
    """Submitted form is incomplete or an attachment breaks a limit."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class StorageError(RuntimeError):
    """The database or the documents bucket rejected a write."""


class NotAuthenticated(Exception):
    """Raised by the admin guard when there is no usable admin session."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)
        self.detail = detail


class JobNotFound(LookupError):
    """The referenced job no longer exists."""
